"""Widget exports for the lumina_design UI."""

from .activity_bar import ActivityBar
from .comparison import ComparisonSlider
from .conversation import ConversationPanel
from .message import MessageBubble
from .preview import RoomPreview
from .status_bar import StatusBar
from .style_picker import StylePicker

__all__ = [
    "ActivityBar",
    "ComparisonSlider",
    "ConversationPanel",
    "MessageBubble",
    "RoomPreview",
    "StatusBar",
    "StylePicker",
]

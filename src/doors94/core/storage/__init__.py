"""Profile storage: key-value backends and the records kept in them."""

from doors94.core.storage.backend import FileStore, InMemoryStore, KeyValueStore
from doors94.core.storage.conversations import Conversation, ConversationStore, Message
from doors94.core.storage.records import Absent, Malformed, Present, ReadResult, read_record
from doors94.core.storage.windows import WindowState, WindowStateStore

__all__ = [
    "Absent",
    "Conversation",
    "ConversationStore",
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
    "Malformed",
    "Message",
    "Present",
    "ReadResult",
    "WindowState",
    "WindowStateStore",
    "read_record",
]

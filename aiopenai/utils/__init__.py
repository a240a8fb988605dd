from aiopenai.utils.message_helpers import format_for_openai, format_messages, image_part
from aiopenai.utils.sse import FrameSplitter, StreamFrame, decode_frame

__all__ = [
    "FrameSplitter",
    "StreamFrame",
    "decode_frame",
    "format_for_openai",
    "format_messages",
    "image_part",
]

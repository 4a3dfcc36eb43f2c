"""Tools package: delegate transports, JSON parsing, and text utilities."""

from tools.agent_sdk_client import AgentSDKClient
from tools.media_client import MediaClient
from tools.llm_client import parse_json_response
from tools.text_utils import (
    truncate_prefix,
    is_valid_range,
    splice,
    clean_free_text,
    count_words,
)

__all__ = [
    "AgentSDKClient",
    "MediaClient",
    "parse_json_response",
    "truncate_prefix",
    "is_valid_range",
    "splice",
    "clean_free_text",
    "count_words",
]

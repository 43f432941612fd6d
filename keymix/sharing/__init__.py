"""Share link module"""

from keymix.sharing.codec import (
    SharePayload,
    SharedTrack,
    decode_share_token,
    encode_share_token,
    mix_from_share_payload,
)

__all__ = [
    "SharePayload",
    "SharedTrack",
    "decode_share_token",
    "encode_share_token",
    "mix_from_share_payload",
]

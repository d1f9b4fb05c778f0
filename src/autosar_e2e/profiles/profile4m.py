"""E2E Profile 4M: Profile 4 with message type, message result and source id.

The extension word sits at header offset +12, right after the Profile 4
header, so a 4M header occupies 16 bytes.
"""

from __future__ import annotations

from .composite import CompositeProfile
from .profile4 import Profile4


class Profile4M(CompositeProfile):
    """Profile 4M protection engine.

    Takes a Profile4Config.

    Example:
        >>> from autosar_e2e import Profile4M
        >>> sender = Profile4M(message_type=1, source_id=0x123456)
        >>> data = bytearray(20)
        >>> sender.protect(data)
        >>> data[8:16].hex(" ")
        '85 25 76 19 40 12 34 56'
    """

    base_class = Profile4
    extension_offset = 12

"""E2E Profile 7M: Profile 7 with message type, message result and source id.

The extension word sits at header offset +20, right after the Profile 7
header, so a 7M header occupies 24 bytes.
"""

from __future__ import annotations

from .composite import CompositeProfile
from .profile7 import Profile7


class Profile7M(CompositeProfile):
    """Profile 7M protection engine. Takes a Profile7Config."""

    base_class = Profile7
    extension_offset = 20

"""E2E profile engines."""

from __future__ import annotations

from .base import BaseProfile, E2EProfile
from .composite import CompositeProfile
from .profile4 import Profile4, Profile4Config
from .profile4m import Profile4M
from .profile5 import Profile5, Profile5Config
from .profile6 import Profile6, Profile6Config
from .profile7 import Profile7, Profile7Config
from .profile7m import Profile7M
from .profile8 import Profile8, Profile8Config
from .profile11 import Profile11, Profile11Config, Profile11IdMode
from .profile22 import Profile22, Profile22Config

__all__ = [
    "E2EProfile",
    "BaseProfile",
    "CompositeProfile",
    "Profile4",
    "Profile4Config",
    "Profile4M",
    "Profile5",
    "Profile5Config",
    "Profile6",
    "Profile6Config",
    "Profile7",
    "Profile7Config",
    "Profile7M",
    "Profile8",
    "Profile8Config",
    "Profile11",
    "Profile11Config",
    "Profile11IdMode",
    "Profile22",
    "Profile22Config",
]

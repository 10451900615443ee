from __future__ import annotations

"""Device class from the window width.

Desktop shows activity details in a tooltip with an inline delete button;
mobile (narrow windows) opens a detail dialog on tap instead.
"""

from typing import Literal

DeviceClass = Literal["mobile", "desktop"]

MOBILE_BREAKPOINT = 768


def device_class(width: int, breakpoint: int = MOBILE_BREAKPOINT) -> DeviceClass:
    return "mobile" if width < breakpoint else "desktop"


def is_mobile(width: int, breakpoint: int = MOBILE_BREAKPOINT) -> bool:
    return device_class(width, breakpoint) == "mobile"


__all__ = ["DeviceClass", "MOBILE_BREAKPOINT", "device_class", "is_mobile"]

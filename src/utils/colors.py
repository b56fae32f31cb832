import string
from collections import namedtuple

RGBA = namedtuple("RGBA", ["red", "green", "blue", "alpha"])

WHITE = RGBA(1.0, 1.0, 1.0, 1.0)


def hex_to_rgba(value):
    """Parse "#RRGGBB" or "#RRGGBBAA" into 0..1 channels; anything else is white."""
    digits = (value or "").strip().lstrip("#")
    if len(digits) not in (6, 8) or any(ch not in string.hexdigits for ch in digits):
        return WHITE

    number = int(digits, 16)
    if len(digits) == 6:
        return RGBA(
            ((number >> 16) & 0xFF) / 255,
            ((number >> 8) & 0xFF) / 255,
            (number & 0xFF) / 255,
            1.0,
        )
    return RGBA(
        ((number >> 24) & 0xFF) / 255,
        ((number >> 16) & 0xFF) / 255,
        ((number >> 8) & 0xFF) / 255,
        (number & 0xFF) / 255,
    )


def rgba_to_hex(color, include_alpha=False):
    channels = [color.red, color.green, color.blue]
    if include_alpha:
        channels.append(color.alpha)
    return "#" + "".join(f"{round(max(0.0, min(1.0, c)) * 255):02X}" for c in channels)


THEME = {
    "primary_blue": RGBA(0.0, 0.48, 1.0, 1.0),
    "success_green": RGBA(0.2, 0.78, 0.35, 1.0),
    "warning_orange": RGBA(1.0, 0.58, 0.0, 1.0),
    "error_red": RGBA(1.0, 0.23, 0.19, 1.0),
}

GRADIENTS = {
    "primary": (hex_to_rgba("#141738"), hex_to_rgba("#121965")),
    "secondary": (hex_to_rgba("#FE6439"), hex_to_rgba("#F92E12")),
    "blue_white": (hex_to_rgba("#DACFFF"), hex_to_rgba("#F8F5FF")),
}


def theme_color(name):
    return THEME.get(name, WHITE)


def gradient(name):
    return GRADIENTS[name]

# SPDX-License-Identifier: GPL-3.0-or-later

DEFAULT_COLOR = 'blue'

TAG_COLORS = {
    'red':     '#E53935',
    'orange':  '#FB8C00',
    'yellow':  '#FDD835',
    'green':   '#43A047',
    'blue':    '#1E88E5',
    'purple':  '#8E24AA',
    'gray':    '#757575',
}

COLOR_NAMES = list(TAG_COLORS.keys())


def get_color(tag) -> str:
    """Map a tag's stored color name to a renderable hex value.

    Unknown names are kept in storage untouched and only fall back to
    the default color here.
    """
    if tag.color in TAG_COLORS:
        return TAG_COLORS[tag.color]
    return TAG_COLORS[DEFAULT_COLOR]

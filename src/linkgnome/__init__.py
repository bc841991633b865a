# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""LinkGnome - hardlink media files into a Plex-style library."""

from linkgnome.__about__ import __version__

__all__ = ["__version__"]

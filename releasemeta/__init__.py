# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
releasemeta: hidden release metadata decoding and install verification.

Publishers hide a small JSON document at the very start of a release
changelog. This package finds it, decodes it into a compatibility
descriptor, and checks the running install against it.
"""

__version__ = "0.1.0"

# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
HiCARS - UTIG HiCARS dual-channel radar ingest and channel merge
"""

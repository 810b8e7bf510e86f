# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
rdata flags to hold the processing state of a radar profile
"""

class flags(object):
    def __init__(self):
        #: merged, bool high and low gain channels combined into dat
        self.merged = False
        #: splice, int flight-line splice sample before back-off
        self.splice = None
        #: cut, int first sample taken from the high gain channel
        self.cut = None
        #: tshift, bool fast time axis corrected for transmit delay
        self.tshift = False

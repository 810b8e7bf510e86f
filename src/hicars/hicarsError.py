# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
hicars exception types
"""

class hicarsError(Exception):
    """base error for anything hicars refuses to process"""
    pass


class MissingAttributeEntry(hicarsError):
    """a required metadata attribute block is absent from the file"""
    def __init__(self, msg, entry=None):
        super().__init__(msg)
        #: str, attribute name that was not found
        self.entry = entry


class PreconditionViolation(hicarsError):
    """
    a processing step was asked to run on data it cannot use:
    a required parameter record field is unset, or the two
    channel arrays do not share a shape
    """
    def __init__(self, msg, field=None, shapes=None):
        super().__init__(msg)
        #: str, parameter record key that is unset
        self.field = field
        #: tuple, (low gain shape, high gain shape) when shapes disagree
        self.shapes = shapes


class UndeterminedSplice(hicarsError):
    """no sampled sounding produced a splice candidate"""
    def __init__(self, msg, skipped=0):
        super().__init__(msg)
        #: int, number of sampled soundings without a candidate
        self.skipped = skipped

# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
radar system and processing parameters parsed from HiCARS attribute text
"""
### imports ###
from hicars.hicarsError import PreconditionViolation
import numpy as np

# record key -> attribute name
FIELDS = {"Instrument": "instrument",
          "CenterFrequency": "cf",
          "F1": "f1",
          "F2": "f2",
          "PRF": "prf",
          "PulseLength": "plen",
          "HiGain": "higain",
          "LoGain": "logain",
          "SamplingRate": "fs",
          "OnboardStacks": "onboard_stacks",
          "TXDelay": "txdelay",
          "CoherentSums": "coh_sums",
          "IncoherentSums": "incoh_sums"}


class params(object):
    """
    params holds the instrument parameters of a radar profile.
    every field starts out as None and stays None if it could not be parsed -
    an unset field is never stood in for by zero or nan.
    """
    def __init__(self):
        #: str, name of radar instrument
        self.instrument = None
        #: float, center frequency of chirp [Hz]
        self.cf = None
        #: float, start frequency of chirp [Hz]
        self.f1 = None
        #: float, end frequency of chirp [Hz]
        self.f2 = None
        #: float, pulse repetition frequency [Hz]
        self.prf = None
        #: float, pulse length [s]
        self.plen = None
        #: float, high gain channel gain [dB]
        self.higain = None
        #: float, low gain channel gain [dB]
        self.logain = None
        #: float, fast time sampling rate [Hz]
        self.fs = None
        #: float, number of onboard coherent sums
        self.onboard_stacks = None
        #: float, offset between start of fast time axis and signal transmission [s]
        self.txdelay = None
        #: float, number of post-processing coherent sums
        self.coh_sums = None
        #: float, number of post-processing incoherent sums
        self.incoh_sums = None
        #: list, diagnostics emitted while parsing
        self.notes = []

        return


    # get field value by record key
    def get(self, key):
        return getattr(self, FIELDS[key])


    # set field value by record key
    def set(self, key, val):
        setattr(self, FIELDS[key], val)


    # note appends a parsing diagnostic and echoes it
    def note(self, msg):
        self.notes.append(msg)
        print(msg)


    def require(self, *keys):
        """raise PreconditionViolation naming the first unset record key"""
        for key in keys:
            if self.get(key) is None:
                raise PreconditionViolation("{} is not set in the parameter record.".format(key), field=key)


    # return dict of record key -> value, unset fields as empty arrays for .mat export
    def to_dict(self, empty=True):
        out = {}
        for key in FIELDS:
            val = self.get(key)
            if val is None and empty:
                val = np.array([])
            out[key] = val
        return out


    def __repr__(self):
        vals = ", ".join("{}={}".format(key, self.get(key)) for key in FIELDS if self.get(key) is not None)
        return "params({})".format(vals)

# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
### imports ###
from hicars.radar.flags import flags
from hicars.radar.params import params
from hicars.hicarsError import hicarsError
import numpy as np

class echogram(object):
    """
    echogram is the dataset object for hicars, holding both receive
    channels of a radar profile, the merged data array, the fast time
    axis, per-trace navigation and the parsed instrument parameters.
    keep track of processing steps with the flags attribute.
    """
    #: Attributes that every echogram object should have.
    #: These should not be None.
    required_attrs = ["fpath",
                        "fn",
                        "dtype",
                        "nchan",
                        "dat_lo",
                        "dat_hi",
                        "snum",
                        "tnum",
                        "twtt",
                        "navdf",
                        "params"]
    # import processing tools
    from hicars.radar.processing import merge_channels, adjust_fasttime

    def __init__(self, fpath):
        # basic data file attributes
        #: str, file path
        self.fpath = fpath
        #: str, file name
        self.fn = None
        #: str, scientific data type
        self.dtype = None
        #: int, number of samples per trace
        self.snum = None
        #: int, the number of traces in the file
        self.tnum = None
        #: float, time between samples
        self.dt = None
        #: int, number of data channels
        self.nchan = None
        #: dict, global file attributes, name -> text
        self.attrs = {}
        #: np.ndarray(snum x tnum), low gain channel [linear power]
        self.dat_lo = None
        #: np.ndarray(snum x tnum), high gain channel [linear power]
        self.dat_hi = None
        #: np.ndarray(snum x tnum), merged radar data [linear power]
        self.dat = None
        #: parsed radar system and processing parameters
        self.params = params()
        #: radar flags object
        self.flags = flags()

        # per-trace attributes
        #: navigation dataframe consisting of [gps_time, lon, lat, elev, roll, pitch, heading], each of size np.ndarray(tnum,)
        self.navdf = None
        #: np.ndarray(tnum,), surface sample per trace - None if untracked
        self.surface = None
        #: np.ndarray(tnum,), bed sample per trace - None if untracked
        self.bottom = None

        # sample-wise attributes
        #: np.ndarray(snum,) fast time to each sample, in seconds
        self.twtt = None

        # optional attributes
        #: list, history of dataset operations history - may be exported as script
        self.hist = []
        return


    # set radar data
    def set_dat(self, dat):
        self.dat = dat


    # get radar data
    def get_dat(self):
        return self.dat


    # set low and high gain channels
    def set_channels(self, lo, hi):
        self.dat_lo = lo
        self.dat_hi = hi
        self.nchan = 2


    # set twtt array
    def set_twtt(self, arr = None):
        if arr is not None:
            self.twtt = arr
        else:
            if not [x for x in (self.snum, self.dt) if x is None]:
                self.twtt = np.arange(self.snum) * self.dt
        return


    # get twtt array
    def get_twtt(self):
        return self.twtt


    # append previous command to log
    def log(self, cmd=None):
        if cmd and isinstance(cmd,str):
            self.hist.append(cmd)


    def check_attrs(self):
        """check if required echogram attributes exist
        ------
        hicarsError
            If any required attribute is None, or array
            shapes disagree with snum and tnum
        """
        for attr in self.required_attrs:
            if not hasattr(self, attr):
                raise hicarsError("{:s} is missing.".format(attr))
            if getattr(self, attr) is None:
                raise hicarsError("{:s} is None.".format(attr))

        # check data array shapes
        for attr in ["dat_lo", "dat_hi"]:
            if getattr(self, attr).shape[:2] != (self.snum, self.tnum):
                raise hicarsError("Data shape is inconsistent with the number of traces and the number of samples.\n{} Array Shape: {}\nSamples: {}\nTraces: {}".format(attr, getattr(self, attr).shape, self.snum, self.tnum))

        if len(self.twtt) != self.snum:
            raise hicarsError("Fast time axis length is inconsistent with the number of samples.\nFast time length: {}\nSamples: {}".format(len(self.twtt), self.snum))

        if self.navdf.shape[0] != self.tnum:
            raise hicarsError("Nav dataframe shape is inconsistent with the number of traces.\nNav dataframe shape: {}\nTraces: {}".format(self.navdf.shape[0],self.tnum))

        return

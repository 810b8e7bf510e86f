# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
ingest_hicars is a module developed to ingest UTIG HiCARS radar sounding data distributed
through NASA Operation IceBridge. data format is NetCDF-4, which is read here as the HDF5
container it is built on. both receive channels are stored in dB and converted to linear power.
"""
### imports ###
from hicars.radar import echogram
from hicars.ingest import metadata
from hicars.tools import utils
import h5py
import numpy as np
import pandas as pd
import os

# netcdf variable name -> echogram navdf column
NAVVARS = {"time": "gps_time",
           "lon": "lon",
           "lat": "lat",
           "altitude": "elev",
           "roll": "roll",
           "pitch": "pitch",
           "heading": "heading"}

# netcdf variable name -> channel
CHANVARS = {"amplitude_low_gain": "lo",
            "amplitude_high_gain": "hi"}


# attr_text returns a global attribute value as text
def attr_text(val):
    if isinstance(val, bytes):
        return val.decode()
    if isinstance(val, np.ndarray):
        if val.dtype.kind in ("S", "O", "U"):
            return "".join(v.decode() if isinstance(v, bytes) else str(v) for v in val.flatten())
        if val.size == 1:
            return str(val.item())
    return str(val)


# read_var reads a netcdf variable, unpacking fill values, scale and offset
def read_var(ds):
    arr = ds[:].astype(float)
    if "_FillValue" in ds.attrs:
        arr[arr == np.asarray(ds.attrs["_FillValue"]).item()] = np.nan
    if "scale_factor" in ds.attrs:
        arr *= np.asarray(ds.attrs["scale_factor"]).item()
    if "add_offset" in ds.attrs:
        arr += np.asarray(ds.attrs["add_offset"]).item()
    return arr


# is_dim_only returns true for netcdf dimensions stored without a coordinate variable
def is_dim_only(ds):
    name = ds.attrs.get("NAME", b"")
    if isinstance(name, bytes):
        name = name.decode(errors="ignore")
    return str(name).startswith("This is a netCDF dimension but not a netCDF variable")


# method to ingest HiCARS netcdf data
def read_nc(fpath):
    rdata = echogram(fpath)
    rdata.fn = os.path.splitext(os.path.basename(fpath))[0]
    rdata.dtype = "hicars"

    f = h5py.File(rdata.fpath, "r")

    # global attribute text blocks, in file order
    rdata.attrs = {name: attr_text(val) for name, val in f.attrs.items()}

    nav = {}
    chans = {}
    for name, ds in f.items():
        if not isinstance(ds, h5py.Dataset) or is_dim_only(ds):
            continue
        if name == "fasttime":
            rdata.set_twtt(read_var(ds).flatten()*1e-6)                 # us -> s
        elif name in NAVVARS:
            nav[NAVVARS[name]] = read_var(ds).flatten()
        elif name in CHANVARS:
            chans[CHANVARS[name]] = utils.powdB2pow(read_var(ds))       # dB -> linear power
        else:
            print("Extra variable {} not written to output data.".format(name))

    f.close()

    # parse radar and processing parameters from attribute text
    rdata.params = metadata.parse_metadata(rdata.attrs)

    if "lo" in chans and "hi" in chans:
        lo, hi = chans["lo"], chans["hi"]
        # orient channels fast time x trace
        if rdata.twtt is not None:
            snum = len(rdata.twtt)
            if lo.shape[0] != snum and lo.shape[1] == snum:
                lo = lo.T
            if hi.shape[0] != snum and hi.shape[1] == snum:
                hi = hi.T
        rdata.set_channels(lo, hi)
        rdata.snum, rdata.tnum = lo.shape

    # sampling interval, sec
    if rdata.params.fs is not None:
        rdata.dt = 1/rdata.params.fs
    elif rdata.twtt is not None and len(rdata.twtt) > 1:
        rdata.dt = np.diff(rdata.twtt)[0]
    if rdata.twtt is None:
        rdata.set_twtt()

    # per-trace nav, absent fields filled with nan
    if rdata.tnum is not None:
        rdata.navdf = pd.DataFrame({col: nav.get(col, np.repeat(np.nan, rdata.tnum)) for col in NAVVARS.values()})

    rdata.check_attrs()

    return rdata

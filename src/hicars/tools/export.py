# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
echogram export functions for hicars
"""
### imports ###
import numpy as np
import scipy.io as sio
import os, re


# out_name returns the output file name for an echogram - taken from the named global
# attribute if given and present, otherwise the input file name
def out_name(rdata, name_attr=None):
    if name_attr and rdata.attrs.get(name_attr, "").strip():
        name = rdata.attrs[name_attr].strip()
        # keep the name usable as a file name
        return re.sub(r"[^\w.\-]+", "_", name)
    return rdata.fn


# empty maps None to an empty array, the way matlab stores []
def empty(a):
    if a is None:
        return np.array([])
    return a


def mat_dict(rdata):
    """
    build the output record in the CReSIS OIB field layout

    INPUT:
    rdata       echogram object

    OUTPUT:
    out         dict of matlab variable name -> value
    """
    nav = rdata.navdf
    out = {"Latitude": nav["lat"].to_numpy(),
           "Longitude": nav["lon"].to_numpy(),
           "Elevation": nav["elev"].to_numpy(),
           "Roll": nav["roll"].to_numpy(),
           "Pitch": nav["pitch"].to_numpy(),
           "Heading": nav["heading"].to_numpy(),
           "GPS_time": nav["gps_time"].to_numpy(),
           "Surface": empty(rdata.surface),
           "Bottom": empty(rdata.bottom),
           "Data_Low_Gain": rdata.dat_lo,
           "Data_High_Gain": rdata.dat_hi,
           "Data": empty(rdata.get_dat()),
           "Time": rdata.get_twtt(),
           "params": rdata.params.to_dict()}
    return out


# save_mat writes the echogram record to out_dir/name.mat and returns the file path
def save_mat(rdata, out_dir, name=None, name_attr=None):
    if name is None:
        name = out_name(rdata, name_attr)
    if not os.path.isdir(out_dir):
        os.makedirs(out_dir)
    fpath = os.path.join(out_dir, name + ".mat")
    sio.savemat(fpath, mat_dict(rdata), do_compression=True)
    rdata.log("export.save_mat(rdata, '{}', name='{}')".format(out_dir, name))
    print("# echogram exported to:\t{}".format(fpath))
    return fpath

# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
radar data ingest wrapper
"""
### imports ###
from hicars.ingest import ingest_hicars
import os

class ingest:
    # ingest is a class which builds an echogram object holding data and metadata from the file
    def __init__(self, fpath):
        # ftype is a string specifying filetype
        # valid options -
        # nc
        valid_types = ["nc"]
        ftype = fpath.split(".")[-1].lower()

        if (ftype not in valid_types):

            raise ValueError("Invalid file type specifier: " +
                ftype + "\nValid file types: " + str(valid_types))

        self.fpath = fpath
        self.ftype = ftype


    def read(self):
        # wrapper method for reading in a file
        print("----------------------------------------")
        print("Loading: " + os.path.basename(self.fpath))

        if (self.ftype == "nc"):
            self.rdata = ingest_hicars.read_nc(self.fpath)

        print("----------------------------------------")
        print("Loaded: " + self.rdata.fn)

        # add ingest commands to log
        self.rdata.log('igst = ingest.ingest("{}")'.format(self.fpath))
        self.rdata.log('rdata = igst.read()')

        return self.rdata

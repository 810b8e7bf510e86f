# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
hicars - read UTIG HiCARS netcdf files, merge the high and low gain channels,
correct fast time for the transmit delay and export each profile to a .mat file
"""
### imports ###
from hicars import config
from hicars.ingest import ingest
from hicars.tools import export
from hicars.hicarsError import hicarsError
import os, sys, glob, argparse

def main(argv=None):

    # get configuration file
    basedir = os.path.join(os.path.expanduser('~'),'HiCARS')
    if not os.path.isdir(basedir):
        os.mkdir(basedir)
    if not os.path.isfile(basedir+'/config.ini'):
        config.create_config(basedir+'/config.ini')
    configPath = basedir + '/config.ini'

    # set up CLI
    parser = argparse.ArgumentParser(
    description=f"HiCARS channel merge\n\nDefault configuration file path: {configPath}",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("files", help="HiCARS netcdf file paths - defaults to all .nc files in the configured data path", nargs="*")
    parser.add_argument("-c", "--config", help="Configuration file path", default=configPath)
    parser.add_argument("-o", "--out", help="Output directory - defaults to the configured output path, then the data file directory", default=None)
    parser.add_argument("--no-merge", help="Skip the channel merge", action="store_true")
    parser.add_argument("--no-tshift", help="Skip the fast time transmit delay correction", action="store_true")
    args = parser.parse_args(argv)

    if os.path.isfile(args.config) and args.config.endswith(".ini"):
        configPath = args.config
    else:
        print(f"Configuration file not found at: {args.config}\nFull file path must be entered.\nDefaulting to: {configPath}")
    conf = config.load_config(configPath)

    files = args.files
    if not files and conf["datPath"]:
        files = sorted(glob.glob(os.path.join(conf["datPath"], "*.nc")))
    if not files:
        print("No HiCARS files to process. Pass file paths or set datPath in the configuration file.")
        return 1

    failed = 0
    for fpath in files:
        try:
            rdata = ingest(fpath).read()
            if not args.no_merge:
                rdata.merge_channels(**conf["merge"])
            if not args.no_tshift:
                rdata.adjust_fasttime()
            outPath = args.out or conf["outPath"] or os.path.dirname(os.path.abspath(fpath))
            export.save_mat(rdata, outPath, name_attr=conf["name_attr"])
        except (hicarsError, ValueError, OSError) as err:
            print("Error processing {}:\t{}".format(fpath, err))
            failed += 1

    print("----------------------------------------")
    print("{} of {} files processed".format(len(files) - failed, len(files)))

    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main())

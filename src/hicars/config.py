# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
# create and read hicars config file
from hicars.radar import processing
import configparser

def create_config(fpath):

    config = configparser.ConfigParser(allow_no_value=True, delimiters='=')
    config.add_section('path')
    config.set('path', '# str datPath: path to HiCARS netcdf files (optional)')
    config.set('path', 'datPath', '')
    config.set('path', '# str outPath: output path for .mat files (optional, defaults to the data file directory)')
    config.set('path', 'outPath', '')

    config.add_section('merge')
    config.set('merge', '# int stride: number of traces between sampled splice estimates')
    config.set('merge', 'stride', str(processing.STRIDE))
    config.set('merge', '# int window: smoothing window for the channel power difference [samples]')
    config.set('merge', 'window', str(processing.WINDOW))
    config.set('merge', '# bool center: center the smoothing window on each sample rather than trailing it')
    config.set('merge', 'center', 'False')
    config.set('merge', '# float thold: channel divergence threshold [dB]')
    config.set('merge', 'thold', str(processing.THOLD))
    config.set('merge', '# int exclude: samples below the surface in which no splice is accepted')
    config.set('merge', 'exclude', str(processing.EXCLUDE))
    config.set('merge', '# int backoff: samples to back off from the detected splice toward the surface')
    config.set('merge', 'backoff', str(processing.BACKOFF))

    config.add_section('output')
    config.set('output', '# str name_attr: global attribute holding the output file name (optional, defaults to the data file name)')
    config.set('output', 'name_attr', '')
    with open(fpath, 'w') as f:
        config.write(f)


def load_config(fpath=None):
    """
    read a hicars config file into a dict of typed settings,
    falling back to the defaults for anything not set

    INPUT:
    fpath       config file path - defaults only if None

    OUTPUT:
    conf        dict with keys datPath, outPath, name_attr and merge (dict of merge keywords)
    """
    config = configparser.ConfigParser(allow_no_value=True, delimiters='=')
    if fpath is not None:
        config.read(fpath)

    conf = {"datPath": config.get('path', 'datPath', fallback='') or None,
            "outPath": config.get('path', 'outPath', fallback='') or None,
            "name_attr": config.get('output', 'name_attr', fallback='') or None}

    # empty entries mean default
    def num(key, cast, default):
        val = config.get('merge', key, fallback='')
        return cast(val) if val else default

    conf["merge"] = {"stride": num('stride', int, processing.STRIDE),
                     "window": num('window', int, processing.WINDOW),
                     "thold": num('thold', float, processing.THOLD),
                     "exclude": num('exclude', int, processing.EXCLUDE),
                     "backoff": num('backoff', int, processing.BACKOFF),
                     "center": config.getboolean('merge', 'center', fallback=False) if config.get('merge', 'center', fallback='') else False}

    return conf

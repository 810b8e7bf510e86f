# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
metadata is a module to parse HiCARS radar system and processing parameters out of
the free-text global attributes stored with each NetCDF file.

each rule finds an outer phrase in one attribute block, e.g. "Center Frequency: 60 MHz",
then reads the number(s) from inside that phrase only, so stray numbers elsewhere in
the same block are never picked up.
"""
### imports ###
from hicars.radar.params import params
from hicars.hicarsError import MissingAttributeEntry
from collections import namedtuple
import re

# unsigned integer or decimal
NUM = r"\d+(?:\.\d*)?"

# attribute blocks holding parameters
ENTRIES = ["instrument", "rfparams", "digital", "TX-record_offset", "processing"]

# entry: attribute name, keys: record key(s) filled in left-to-right order,
# pattern: outer phrase (None to take the whole text), scale: unit conversion, label: name used in diagnostics
rule = namedtuple("rule", ["entry", "keys", "pattern", "scale", "label"])

RULES = [
    rule("instrument", ("Instrument",), None, None, "instrument"),
    # rf parameters
    rule("rfparams", ("CenterFrequency",), r"Center Frequency:\s+{n}\s+MHz".format(n=NUM), 1e6, "center frequency"),
    rule("rfparams", ("F1", "F2"), r"Chirp:\s+{n}\s+MHz\s+to\s+{n}\s+MHz".format(n=NUM), 1e6, "bandwidth"),
    rule("rfparams", ("PRF",), r"PRF:\s+{n}\s+Hz".format(n=NUM), 1, "PRF"),
    rule("rfparams", ("PulseLength",), r"{n}\s+microsecond".format(n=NUM), 1e-6, "pulse length"),
    rule("rfparams", ("HiGain",), r"high gain\s+\(?{n}\s*dB".format(n=NUM), 1, "high gain"),
    rule("rfparams", ("LoGain",), r"low gain\s+\(?{n}\s*dB".format(n=NUM), 1, "low gain"),
    # digital parameters
    rule("digital", ("SamplingRate",), r"Sample rate:\s+{n}\s+MHz".format(n=NUM), 1e6, "sampling rate"),
    rule("digital", ("OnboardStacks",), r"{n}\s+onboard stacks".format(n=NUM), 1, "onboard stacks"),
    # tx offset parameters
    rule("TX-record_offset", ("TXDelay",), r"{n}\s+microseconds".format(n=NUM), 1e-6, "TX delay"),
    # processing parameters
    rule("processing", ("CoherentSums",), r"Coherent stacking:\s+{n}".format(n=NUM), 1, "coherent sums"),
    rule("processing", ("IncoherentSums",), r"Incoherent averaging:\s+{n}".format(n=NUM), 1, "incoherent sums"),
]


# attr_dict turns attribute entries into a name -> text dict
# accepts a mapping or an ordered sequence of (name, text) pairs - a repeated name keeps its last text
def attr_dict(attrs):
    if hasattr(attrs, "items"):
        attrs = attrs.items()
    out = {}
    for name, text in attrs:
        if isinstance(text, bytes):
            text = text.decode()
        out[name] = text
    return out


def extract(text, pattern, count=1):
    """
    two-stage numeric extraction

    INPUT:
    text        attribute text block
    pattern     outer phrase regular expression
    count       number of values to read from inside the phrase

    OUTPUT:
    list of floats in left-to-right order, or None if the phrase is absent
    """
    match = re.search(pattern, text)
    if match is None:
        return None
    vals = re.findall(NUM, match.group(0))
    return [float(v) for v in vals[:count]]


def parse_metadata(attrs, rules=RULES, strict=False):
    """
    build a parameter record from HiCARS attribute entries

    INPUT:
    attrs       mapping or sequence of (name, text) attribute entries
    rules       extraction rule table
    strict      raise MissingAttributeEntry instead of noting a missing attribute block

    OUTPUT:
    meta        params object - fields whose phrase is not found stay None
    """
    meta = params()
    blocks = attr_dict(attrs)

    # report each missing attribute block once
    missing = []
    for r in rules:
        if r.entry not in blocks and r.entry not in missing:
            missing.append(r.entry)
            if strict:
                raise MissingAttributeEntry("No {} attribute found.".format(r.entry), entry=r.entry)
            meta.note("No {} attribute found.".format(r.entry))

    for r in rules:
        if r.entry in missing:
            continue
        text = blocks[r.entry]

        # verbatim text field
        if r.pattern is None:
            meta.set(r.keys[0], text)
            continue

        vals = extract(text, r.pattern, len(r.keys))
        if vals is None:
            meta.note("No {} found.".format(r.label))
            continue
        for key, val in zip(r.keys, vals):
            meta.set(key, r.scale*val)

    return meta

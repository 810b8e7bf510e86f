# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
hicars radar data processing tools - channel merge and fast time calibration
"""
### imports ###
from hicars.tools import utils
from hicars.hicarsError import PreconditionViolation, UndeterminedSplice
from collections import namedtuple
import numpy as np

# merge defaults, tuned for the HiCARS receiver
STRIDE = 1000       # traces between sampled splice estimates
WINDOW = 30         # smoothing window [samples]
THOLD = 3           # channel divergence threshold [dB]
EXCLUDE = 100       # samples after the surface in which no splice is accepted
BACKOFF = 10        # samples to back off from the detected splice

#: splice, flight-line splice sample; cut, first sample from the high gain channel;
#: candidates, per-trace splice samples; skipped, sampled traces without a candidate
splice_est = namedtuple("splice_est", ["splice", "cut", "candidates", "skipped"])


def check_shapes(lo, hi):
    if np.shape(lo) != np.shape(hi):
        raise PreconditionViolation("Low gain and high gain data arrays differ in shape.\nLow gain shape: {}\nHigh gain shape: {}".format(np.shape(lo), np.shape(hi)),
                                    shapes=(np.shape(lo), np.shape(hi)))


def equalize_gain(lo, prm):
    """
    put the low gain channel on the same footing as the high gain channel
    by adding the receiver gain offset

    INPUT:
    lo          low gain data array [linear power]
    prm         params object, HiGain and LoGain must be set

    OUTPUT:
    out         gain equalized low gain array [linear power]
    """
    prm.require("HiGain", "LoGain")
    offset = prm.higain - prm.logain
    return lo*10**(offset/10)


def splice_candidates(lo, hi, surface=None, stride=STRIDE, window=WINDOW, thold=THOLD, exclude=EXCLUDE, center=False):
    """
    estimate the splice sample for every stride-th trace. the splice is where the
    smoothed power difference between the channels first exceeds the threshold,
    searching down from the surface and skipping the exclusion zone just below it.

    INPUT:
    lo          gain equalized low gain array [linear power]
    hi          high gain array [linear power]
    surface     surface sample per trace - if None or empty, use the low gain peak sample
    stride      traces between estimates
    window      smoothing window [samples]
    thold       divergence threshold [dB]
    exclude     samples below the surface to ignore
    center      center the smoothing window instead of trailing it. the default
                trailing window is not the matlab movmean alignment, which
                center=True reproduces and which places the splice earlier

    a sampled trace that is all nan, or whose surface sample falls outside
    the trace, is counted as skipped.

    OUTPUT:
    candidates  list of splice samples, one per trace that produced one
    skipped     number of sampled traces that produced no candidate
    """
    check_shapes(lo, hi)
    snum, tnum = lo.shape
    if surface is not None:
        surface = np.asarray(surface, dtype=float).flatten()
        if surface.size == 0:
            surface = None
        elif surface.size != tnum:
            raise PreconditionViolation("Surface index vector length {} does not match the number of traces {}.".format(surface.size, tnum),
                                        field="Surface")

    candidates = []
    skipped = 0
    for k in range(0, tnum, stride):
        # dropout trace
        if np.isnan(lo[:, k]).all():
            skipped += 1
            continue
        # start at the tracked surface, or the peak low gain sample if untracked
        if surface is None or np.isnan(surface[k]):
            start = int(np.nanargmax(lo[:, k]))
        else:
            start = int(surface[k])
        if start < 0 or start >= snum:
            skipped += 1
            continue

        gap = utils.movmean(utils.db_gap(lo[start:, k], hi[start:, k]), window, center=center)
        with np.errstate(invalid="ignore"):
            idx = np.flatnonzero(gap > thold)
        idx = idx[idx >= exclude]
        if idx.size == 0:
            skipped += 1
            continue
        candidates.append(start + int(idx[0]))

    return candidates, skipped


def stack_channels(lo, hi, cut):
    # low gain above cut, high gain from cut down
    check_shapes(lo, hi)
    return np.vstack((lo[:cut, :], hi[cut:, :]))


def merge(lo, hi, prm, surface=None, stride=STRIDE, window=WINDOW, thold=THOLD, exclude=EXCLUDE, backoff=BACKOFF, center=False):
    """
    calibrate and merge the high and low gain channels into one data array

    INPUT:
    lo          low gain data array [linear power]
    hi          high gain data array [linear power]
    prm         params object holding the channel gains
    surface     optional surface sample per trace
    backoff     samples to back off from the averaged splice
    remaining keywords are passed to splice_candidates

    OUTPUT:
    dat         merged data array [linear power], same shape as the inputs
    est         splice_est tuple
    """
    check_shapes(lo, hi)
    lo = equalize_gain(lo, prm)

    candidates, skipped = splice_candidates(lo, hi, surface=surface, stride=stride, window=window,
                                            thold=thold, exclude=exclude, center=center)
    if not candidates:
        raise UndeterminedSplice("No sampled trace produced a splice candidate ({} traces sampled): channels never diverge by more than {} dB.".format(skipped, thold),
                                 skipped=skipped)

    # average sample at which to splice channels
    splice = utils.round_half_up(np.mean(candidates))
    cut = splice - backoff
    if cut < 0:
        print("# splice sample {} is within the {} sample back-off - no low gain samples retained".format(splice, backoff))
        cut = 0

    est = splice_est(splice, cut, candidates, skipped)
    return stack_channels(lo, hi, cut), est


def shift_fasttime(twtt, prm):
    """
    subtract the transmit delay from a fast time axis

    INPUT:
    twtt        fast time axis [s]
    prm         params object, TXDelay must be set

    OUTPUT:
    out         fast time relative to signal transmission [s]
    """
    prm.require("TXDelay")
    return np.asarray(twtt) - prm.txdelay


### echogram processing methods ###

def merge_channels(self, stride=STRIDE, window=WINDOW, thold=THOLD, exclude=EXCLUDE, backoff=BACKOFF, center=False):
    # merge high and low gain channels into the data array
    dat, est = merge(self.dat_lo, self.dat_hi, self.params, surface=self.surface, stride=stride, window=window,
                     thold=thold, exclude=exclude, backoff=backoff, center=center)
    self.set_dat(dat)
    self.flags.merged = True
    self.flags.splice = est.splice
    self.flags.cut = est.cut
    # log
    self.log("rdata.merge_channels(stride={}, window={}, thold={}, exclude={}, backoff={}, center={})".format(stride, window, thold, exclude, backoff, center))
    print("# channels merged: splice sample {}, high gain from sample {}, {} of {} sampled traces without a splice candidate"
          .format(est.splice, est.cut, est.skipped, est.skipped + len(est.candidates)))

    return est


def adjust_fasttime(self):
    # adjust fast time axis to account for the system transmit delay
    if self.flags.tshift:
        print("# fast time already adjusted for transmit delay")
        return

    self.set_twtt(shift_fasttime(self.get_twtt(), self.params))
    self.flags.tshift = True
    # log
    self.log("rdata.adjust_fasttime()")
    print("# fast time shifted by transmit delay: {} microseconds".format(self.params.txdelay*1e6))

    return

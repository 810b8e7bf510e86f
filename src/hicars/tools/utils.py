# HiCARS - dual-channel radar ingest and channel merge
#
# copyright © 2026 HiCARS developers
#
# distributed under terms of the GNU GPL3.0 license
"""
utility functions for hicars
"""
### imports ###
import numpy as np

# powdB2pow
def powdB2pow(array):
    return np.power(10, (array / 10))


# pow2dB
def pow2dB(array):
    # zero power goes to -inf rather than raising a warning
    with np.errstate(divide="ignore", invalid="ignore"):
        out = 10*np.log10(array)
    return out


# db_gap returns the per-sample absolute decibel difference between two power arrays
def db_gap(a, b):
    with np.errstate(invalid="ignore"):
        out = np.abs(pow2dB(a) - pow2dB(b))
    return out


def movmean(array, window, center=False):
    """
    moving average along a 1D array. the window shrinks at the array ends
    so every output sample averages only the samples that exist.

    INPUT:
    array       1D data array
    window      window length [samples]
    center      center the window on each sample - an even window then
                spans window/2 samples before and window/2 - 1 after.
                default is a trailing window ending on each sample

    OUTPUT:
    out         smoothed array, same length as input
    """
    n = len(array)
    kernel = np.ones(window)
    # window sums and sample counts, ending on each sample
    sums = np.convolve(array, kernel)
    counts = np.convolve(np.ones(n), kernel)
    shift = (window - 1)//2 if center else 0
    return sums[shift:shift + n] / counts[shift:shift + n]


# round_half_up rounds a positive float to the nearest integer, halves going up
def round_half_up(val):
    return int(np.floor(val + 0.5))
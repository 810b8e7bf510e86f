import unittest
import numpy as np
import pandas as pd
from hicars.radar import echogram, processing
from hicars.radar.params import params
from hicars.ingest import metadata
from hicars.tools import utils
from hicars.hicarsError import PreconditionViolation, UndeterminedSplice

SNUM = 500
OFFSET = 15     # high gain - low gain [dB]


def gains(hi=48, lo=33):
    prm = params()
    prm.higain = hi
    prm.logain = lo
    return prm


def column(split, snum=SNUM, surf=50):
    """
    one trace pair, returned as (equalized low gain, high gain). the equalized low gain
    sits 0.5 dB above high gain down to the split sample and 20 dB above it from there on
    """
    hi = 10**(-np.arange(snum)/100)
    hi[surf] = 1e3
    lo = hi*10**(0.5/10)
    if split is not None:
        lo[split:] = hi[split:]*100
    return lo, hi


def channels(splits, tnum, snum=SNUM):
    """
    build raw low and high gain arrays. splits maps trace -> split sample, with None for a
    trace whose channels never diverge. traces not listed repeat the trace before them
    """
    lo = np.zeros((snum, tnum))
    hi = np.zeros((snum, tnum))
    col = column(None, snum)
    for k in range(tnum):
        if k in splits:
            col = column(splits[k], snum)
        lo[:, k], hi[:, k] = col
    # undo the gain offset so merge has something to equalize
    return lo/10**(OFFSET/10), hi


class TestEqualizeGain(unittest.TestCase):

    def test_offset_applied(self):
        lo = np.full((4, 3), 2.0)
        out = processing.equalize_gain(lo, gains(48, 38))
        np.testing.assert_allclose(out, 20.0)
        # input untouched
        np.testing.assert_array_equal(lo, 2.0)

    def test_zero_offset_is_identity(self):
        lo = np.random.RandomState(0).rand(20, 7)
        out = processing.equalize_gain(lo, gains(20, 20))
        np.testing.assert_array_equal(out, lo)

    def test_missing_gain(self):
        prm = gains()
        prm.logain = None
        with self.assertRaises(PreconditionViolation) as ctx:
            processing.equalize_gain(np.ones((2, 2)), prm)
        self.assertEqual(ctx.exception.field, "LoGain")

    def test_missing_gain_from_text(self):
        attrs = [("rfparams", "Center Frequency: 60 MHz, high gain (48 dB)")]
        prm = metadata.parse_metadata(attrs)
        self.assertIsNone(prm.logain)
        lo, hi = channels({0: 200}, 2000)
        with self.assertRaises(PreconditionViolation) as ctx:
            processing.merge(lo, hi, prm)
        self.assertEqual(ctx.exception.field, "LoGain")


class TestMerge(unittest.TestCase):

    def test_flight_line_scenario(self):
        lo, hi = channels({0: 200}, 2000)
        dat, est = processing.merge(lo, hi, gains())
        lo_eq = processing.equalize_gain(lo, gains())

        self.assertEqual(dat.shape, (500, 2000))
        self.assertEqual(len(est.candidates), 2)
        self.assertEqual(est.skipped, 0)
        self.assertTrue(195 <= est.splice <= 215)
        self.assertEqual(est.cut, est.splice - processing.BACKOFF)
        np.testing.assert_array_equal(dat[190], lo_eq[190])
        np.testing.assert_array_equal(dat[220], hi[220])
        self.assertFalse(np.array_equal(dat[190], hi[190]))

    def test_rows_come_from_one_channel(self):
        lo, hi = channels({0: 250, 1000: 260}, 1500)
        dat, est = processing.merge(lo, hi, gains())
        lo_eq = processing.equalize_gain(lo, gains())
        np.testing.assert_array_equal(dat[:est.cut], lo_eq[:est.cut])
        np.testing.assert_array_equal(dat[est.cut:], hi[est.cut:])
        self.assertEqual(dat.shape, lo.shape)

    def test_centered_window_splices_earlier(self):
        lo, hi = channels({0: 200}, 2000)
        _, trailing = processing.merge(lo, hi, gains())
        _, centered = processing.merge(lo, hi, gains(), center=True)
        self.assertEqual(trailing.splice, 203)
        self.assertEqual(centered.splice, 189)

    def test_missing_candidates_ignored(self):
        # traces 1000 and 3000 never diverge
        lo, hi = channels({0: 200, 1000: None, 2000: 300, 3000: None}, 4000)
        _, est = processing.merge(lo, hi, gains())
        # same profile with the non-diverging traces removed
        lo2, hi2 = channels({0: 200, 1000: 300}, 2000)
        _, est2 = processing.merge(lo2, hi2, gains())

        self.assertEqual(est.skipped, 2)
        self.assertEqual(est2.skipped, 0)
        self.assertEqual(est.candidates, est2.candidates)
        self.assertEqual(est.splice, est2.splice)
        self.assertEqual(est.splice, 253)

    def test_undetermined_splice(self):
        lo, hi = channels({0: None}, 2000)
        with self.assertRaises(UndeterminedSplice) as ctx:
            processing.merge(lo, hi, gains())
        self.assertEqual(ctx.exception.skipped, 2)

    def test_shape_mismatch(self):
        lo, hi = channels({0: 200}, 10)
        with self.assertRaises(PreconditionViolation) as ctx:
            processing.merge(lo, hi[:, :9], gains())
        self.assertEqual(ctx.exception.shapes, ((SNUM, 10), (SNUM, 9)))

    def test_tracked_surface(self):
        lo, hi = channels({0: 200}, 1)
        lo_eq = processing.equalize_gain(lo, gains())
        # searching from the peak sample finds the divergence at 203
        cands, _ = processing.splice_candidates(lo_eq, hi)
        self.assertEqual(cands, [203])
        # from a tracked surface at 120 the divergence falls inside the exclusion zone
        cands, _ = processing.splice_candidates(lo_eq, hi, surface=np.array([120]))
        self.assertEqual(cands, [220])
        # nan surface falls back to the peak sample
        cands, _ = processing.splice_candidates(lo_eq, hi, surface=np.array([np.nan]))
        self.assertEqual(cands, [203])
        # empty surface means untracked
        cands, _ = processing.splice_candidates(lo_eq, hi, surface=[])
        self.assertEqual(cands, [203])

    def test_nan_trace_skipped(self):
        lo, hi = channels({0: 200}, 3000)
        lo[:, 1000] = np.nan
        hi[:, 1000] = np.nan
        dat, est = processing.merge(lo, hi, gains())
        self.assertEqual(est.skipped, 1)
        self.assertEqual(est.candidates, [203, 203])
        self.assertEqual(est.splice, 203)
        self.assertTrue(np.isnan(dat[:, 1000]).all())

    def test_surface_out_of_range_skipped(self):
        lo, hi = channels({0: 200}, 2000)
        lo_eq = processing.equalize_gain(lo, gains())
        surface = np.full(2000, 120.)
        surface[1000] = SNUM
        cands, skipped = processing.splice_candidates(lo_eq, hi, surface=surface)
        self.assertEqual((cands, skipped), ([220], 1))
        surface[1000] = 120
        surface[0] = -1
        cands, skipped = processing.splice_candidates(lo_eq, hi, surface=surface)
        self.assertEqual((cands, skipped), ([220], 1))

    def test_surface_length_mismatch(self):
        lo, hi = channels({0: 200}, 3)
        with self.assertRaises(PreconditionViolation) as ctx:
            processing.splice_candidates(lo, hi, surface=np.zeros(2))
        self.assertEqual(ctx.exception.field, "Surface")

    def test_negative_cut_clamped(self):
        hi = np.ones((50, 1))
        lo = hi*100/10**(OFFSET/10)
        dat, est = processing.merge(lo, hi, gains(), surface=np.zeros(1), exclude=0)
        self.assertEqual(est.splice, 0)
        self.assertEqual(est.cut, 0)
        np.testing.assert_array_equal(dat, hi)

    def test_stack_channels(self):
        lo = np.zeros((6, 2))
        hi = np.ones((6, 2))
        out = processing.stack_channels(lo, hi, 4)
        np.testing.assert_array_equal(out[:4], 0)
        np.testing.assert_array_equal(out[4:], 1)
        self.assertEqual(out.shape, (6, 2))


class TestShiftFasttime(unittest.TestCase):

    def setUp(self):
        self.twtt = np.arange(100)*2e-8
        self.prm = params()

    def test_shift(self):
        self.prm.txdelay = 2.88e-6
        out = processing.shift_fasttime(self.twtt, self.prm)
        for i in range(len(self.twtt)):
            self.assertEqual(out[i], self.twtt[i] - 2.88e-6)
        # input untouched
        self.assertEqual(self.twtt[0], 0)

    def test_zero_shift(self):
        self.prm.txdelay = 0.0
        np.testing.assert_array_equal(processing.shift_fasttime(self.twtt, self.prm), self.twtt)

    def test_missing_delay(self):
        with self.assertRaises(PreconditionViolation) as ctx:
            processing.shift_fasttime(self.twtt, self.prm)
        self.assertEqual(ctx.exception.field, "TXDelay")


class TestUtils(unittest.TestCase):

    def test_movmean_trailing(self):
        np.testing.assert_allclose(utils.movmean(np.array([1., 2., 3., 4.]), 2), [1, 1.5, 2.5, 3.5])

    def test_movmean_centered(self):
        np.testing.assert_allclose(utils.movmean(np.array([1., 2., 3., 4.]), 3, center=True), [1.5, 2, 3, 3.5])
        # even window spans window/2 before and window/2 - 1 after
        np.testing.assert_allclose(utils.movmean(np.array([1., 2., 3., 4., 5.]), 4, center=True), [1.5, 2, 2.5, 3.5, 4])

    def test_movmean_inf_stays_local(self):
        out = utils.movmean(np.array([np.inf, 1., 1., 1.]), 2)
        self.assertTrue(np.isinf(out[:2]).all())
        np.testing.assert_allclose(out[2:], 1)

    def test_round_half_up(self):
        self.assertEqual(utils.round_half_up(252.5), 253)
        self.assertEqual(utils.round_half_up(2.5), 3)
        self.assertEqual(utils.round_half_up(2.49), 2)


class TestEchogramMethods(unittest.TestCase):

    def setUp(self):
        lo, hi = channels({0: 200}, 2000)
        self.rdata = echogram("/tmp/test.nc")
        self.rdata.fn = "test"
        self.rdata.dtype = "hicars"
        self.rdata.set_channels(lo, hi)
        self.rdata.snum, self.rdata.tnum = lo.shape
        self.rdata.set_twtt(np.arange(SNUM)*2e-8)
        self.rdata.navdf = pd.DataFrame({"lat": np.zeros(2000)})
        self.rdata.params = gains()
        self.rdata.params.txdelay = 1e-6

    def test_merge_channels(self):
        est = self.rdata.merge_channels()
        self.assertTrue(self.rdata.flags.merged)
        self.assertEqual(self.rdata.flags.splice, est.splice)
        self.assertEqual(self.rdata.flags.cut, est.cut)
        self.assertEqual(self.rdata.get_dat().shape, (SNUM, 2000))
        self.assertTrue(self.rdata.hist[-1].startswith("rdata.merge_channels("))

    def test_adjust_fasttime_once(self):
        twtt = self.rdata.get_twtt().copy()
        self.rdata.adjust_fasttime()
        np.testing.assert_array_equal(self.rdata.get_twtt(), twtt - 1e-6)
        self.rdata.adjust_fasttime()
        np.testing.assert_array_equal(self.rdata.get_twtt(), twtt - 1e-6)
        self.assertTrue(self.rdata.flags.tshift)
        self.assertEqual(self.rdata.hist.count("rdata.adjust_fasttime()"), 1)

    def test_check_attrs(self):
        self.rdata.check_attrs()


if __name__ == "__main__":
    unittest.main()

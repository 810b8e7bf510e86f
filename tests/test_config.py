import os
import tempfile
import unittest
from hicars import config
from hicars.radar import processing


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.fpath = os.path.join(self.tmp.name, "config.ini")

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_round_trip(self):
        config.create_config(self.fpath)
        conf = config.load_config(self.fpath)
        self.assertIsNone(conf["datPath"])
        self.assertIsNone(conf["outPath"])
        self.assertIsNone(conf["name_attr"])
        self.assertEqual(conf["merge"], {"stride": processing.STRIDE,
                                         "window": processing.WINDOW,
                                         "thold": processing.THOLD,
                                         "exclude": processing.EXCLUDE,
                                         "backoff": processing.BACKOFF,
                                         "center": False})

    def test_overrides(self):
        with open(self.fpath, "w") as f:
            f.write("[path]\ndatPath = /data/hicars\n\n"
                    "[merge]\nthold = 4.5\nbackoff = 20\ncenter = True\nwindow =\n\n"
                    "[output]\nname_attr = granule\n")
        conf = config.load_config(self.fpath)
        self.assertEqual(conf["datPath"], "/data/hicars")
        self.assertEqual(conf["name_attr"], "granule")
        self.assertEqual(conf["merge"]["thold"], 4.5)
        self.assertEqual(conf["merge"]["backoff"], 20)
        self.assertTrue(conf["merge"]["center"])
        # empty entry keeps the default
        self.assertEqual(conf["merge"]["window"], processing.WINDOW)

    def test_no_file(self):
        conf = config.load_config()
        self.assertEqual(conf["merge"]["stride"], processing.STRIDE)


if __name__ == "__main__":
    unittest.main()

from unittest import TestCase

from ..settings import Settings


class TestSettings(TestCase):
    def setUp(self):
        self.test_settings = {"invitations.request_timeout": "5", "flag": "false"}
        self.test_instance = Settings(self.test_settings)

    def test_settings_init(self):
        for key in self.test_settings:
            assert key in self.test_instance
            assert self.test_instance[key] == self.test_settings[key]
        with self.assertRaises(KeyError):
            self.test_instance["MISSING"]
        with self.assertRaises(TypeError):
            self.test_instance[0]
        assert len(self.test_instance) == 2
        assert self.test_instance
        assert "invitations.request_timeout=5" in repr(self.test_instance)

    def test_get_formats(self):
        assert self.test_instance.get_int("invitations.request_timeout") == 5
        assert self.test_instance.get_int("missing", default=10) == 10
        assert self.test_instance.get_int("missing") is None
        assert self.test_instance.get_bool("flag") is False
        assert self.test_instance.get_bool("missing", default=True) is True
        assert self.test_instance.get_str("invitations.request_timeout") == "5"
        assert self.test_instance.get_value("missing", "flag") == "false"

    def test_set_value(self):
        self.test_instance["log.level"] = "debug"
        assert self.test_instance["log.level"] == "debug"
        self.test_instance.set_default("log.level", "info")
        assert self.test_instance["log.level"] == "debug"
        self.test_instance.set_default("log.file", "resolver.log")
        assert self.test_instance["log.file"] == "resolver.log"
        self.test_instance.update({"log.file": "other.log"})
        assert self.test_instance["log.file"] == "other.log"
        with self.assertRaises(TypeError):
            self.test_instance.set_value(1, "value")
        with self.assertRaises(ValueError):
            self.test_instance.set_value("", "value")

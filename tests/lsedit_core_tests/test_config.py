import pytest


def test_config_basic():
    from lsedit_core.config import Config, OPTION_POSITION_ENCODING

    config = Config()
    settings = {
        "lsedit": {
            "positionEncoding": "utf-8",
            "other": {"value": "10", "value_float": "10.5", "values": ["a"]},
        }
    }
    config.update(settings)
    assert config.get_setting(OPTION_POSITION_ENCODING, str) == "utf-8"

    # i.e.: convert to type when possible
    assert config.get_setting("lsedit.other.value", int) == 10
    assert config.get_setting("lsedit.other.value_float", float) == 10.5
    assert config.get_setting("lsedit.other.values", tuple) == ("a",)

    with pytest.raises(KeyError):
        config.get_setting("lsedit.other.value_float", int)

    with pytest.raises(KeyError):
        config.get_setting("lsedit.other.value", list)

    with pytest.raises(KeyError):
        config.get_setting("lsedit.not_there", int)

    assert config.get_setting("lsedit.not_there", int, 22) == 22


def test_config_override_settings():
    from lsedit_core.config import Config, OPTION_POSITION_ENCODING

    config = Config()
    config.update({"lsedit": {"positionEncoding": "utf-8"}})
    config.set_override_settings({OPTION_POSITION_ENCODING: "utf-32"})
    assert config.get_setting(OPTION_POSITION_ENCODING, str) == "utf-32"

    config.update_override_settings({"lsedit.extra": 1})
    assert config.get_full_settings() == {
        OPTION_POSITION_ENCODING: "utf-32",
        "lsedit.extra": 1,
    }

    config.set_override_settings({})
    assert config.get_setting(OPTION_POSITION_ENCODING, str) == "utf-8"

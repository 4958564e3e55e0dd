import logging

from physengine.config import EngineSettings, configure_logging


def test_defaults():
    s = EngineSettings()
    assert s.id_prefix == "sim-"
    assert s.concentration_floor == 0.05
    assert s.muscle_gain_limit_kg == 12.0
    assert s.min_fat_mass_kg == 3.0


def test_from_env_reads_prefixed_keys():
    env = {
        "PHYSENGINE_ID_PREFIX": "run-",
        "PHYSENGINE_CONCENTRATION_FLOOR": "0.01",
        "PHYSENGINE_MUSCLE_GAIN_LIMIT_KG": "15",
        "PHYSENGINE_LOG_LEVEL": "debug",
    }
    s = EngineSettings.from_env(env)
    assert s.id_prefix == "run-"
    assert s.concentration_floor == 0.01
    assert s.muscle_gain_limit_kg == 15.0
    assert s.min_fat_mass_kg == 3.0
    assert s.log_level == "DEBUG"


def test_bad_numbers_fall_back_with_a_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="physengine.config"):
        s = EngineSettings.from_env({"PHYSENGINE_MIN_FAT_MASS_KG": "lots"})
    assert s.min_fat_mass_kg == 3.0
    assert "PHYSENGINE_MIN_FAT_MASS_KG" in caplog.text


def test_custom_prefix_and_empty_values():
    s = EngineSettings.from_env({"SIM_ID_PREFIX": "x-", "SIM_CONCENTRATION_FLOOR": ""}, prefix="SIM_")
    assert s.id_prefix == "x-"
    assert s.concentration_floor == 0.05


def test_configure_logging_sets_package_level():
    logger = logging.getLogger("physengine")
    previous = logger.level
    try:
        configure_logging(EngineSettings(log_level="DEBUG"))
        assert logger.level == logging.DEBUG
        configure_logging(EngineSettings(log_level="NOT-A-LEVEL"))
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)

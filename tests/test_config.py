from budget_app import config


def test_last_db_round_trip(tmp_path, config_file):
    db_path = tmp_path / "budget.db"
    db_path.touch()

    config.save_last_db(db_path)

    assert config_file.exists()
    assert config.load_last_db() == db_path.resolve()


def test_last_db_ignores_missing_file(tmp_path):
    config.save_last_db(tmp_path / "gone.db")
    assert config.load_last_db() is None


def test_clearing_last_db(tmp_path):
    db_path = tmp_path / "budget.db"
    db_path.touch()
    config.save_last_db(db_path)

    config.save_last_db(None)

    assert config.load_last_db() is None


def test_format_settings_are_written_with_defaults(config_file):
    settings = config.load_format_settings()

    assert settings == {"currency_symbol": "$", "decimals": 2}
    assert "currency_symbol = $" in config_file.read_text(encoding="utf-8")


def test_invalid_format_values_fall_back_to_defaults(config_file):
    config_file.write_text("[format]\ncurrency_symbol = €\ndecimals = many\n", encoding="utf-8")

    settings = config.load_format_settings()

    assert settings == {"currency_symbol": "€", "decimals": 2}
    assert "decimals = 2" in config_file.read_text(encoding="utf-8")


def test_default_db_path_sits_next_to_config(config_file):
    assert config.default_db_path() == config_file.with_name("budget.db")


def test_saved_db_path_is_absolute(tmp_path, monkeypatch, config_file):
    monkeypatch.chdir(tmp_path)

    config.save_last_db("budget.db")

    assert f"db_path = {(tmp_path / 'budget.db').resolve()}" in config_file.read_text(encoding="utf-8")

import json

import pytest

from core.config_store import ConfigStore, validate_table_name
from core.errors import ConfigNotFound, InvalidConfig, InvalidTableName
from models.table_config import TableConfig


@pytest.mark.parametrize("name", ["", None, "../etc", "a/b", "a\\b", ".."])
def test_rejects_unsafe_table_names(name):
    with pytest.raises(InvalidTableName):
        validate_table_name(name)


def test_accepts_plain_table_name():
    assert validate_table_name("order_items") == "order_items"


def test_save_load_roundtrip(tmp_path, users_config_payload):
    store = ConfigStore(tmp_path / "configs")
    path = store.save(TableConfig.model_validate(users_config_payload))

    assert path == tmp_path / "configs" / "users.json"
    on_disk = json.loads(path.read_text())
    assert on_disk["fields"]["id"]["autoIncrement"] is True
    assert on_disk["auth"]["apiKey"] == "XYZ-SECURE-KEY"

    loaded = store.load("users")
    assert loaded.fields["status"].enum_values == ["active", "inactive"]
    assert loaded.db_config.database == "shop"


def test_save_rejects_invalid_config(tmp_path, users_config_payload):
    store = ConfigStore(tmp_path)
    config = TableConfig.model_validate({**users_config_payload, "auth": {"type": "basic"}})
    with pytest.raises(InvalidConfig) as exc_info:
        store.save(config)
    assert exc_info.value.errors == ["Username and password are required when auth type is basic"]
    assert list(tmp_path.iterdir()) == []


def test_list_and_delete(tmp_path, users_config_payload):
    store = ConfigStore(tmp_path / "configs")
    assert store.list_tables() == []

    store.save(TableConfig.model_validate(users_config_payload))
    store.save(TableConfig.model_validate({**users_config_payload, "table": "accounts"}))
    assert store.list_tables() == ["accounts", "users"]
    assert [c.table for c in store.load_all()] == ["accounts", "users"]

    store.delete("users")
    assert store.list_tables() == ["accounts"]
    with pytest.raises(ConfigNotFound):
        store.delete("users")


def test_load_missing(tmp_path):
    with pytest.raises(ConfigNotFound):
        ConfigStore(tmp_path).load("nope")


def test_load_corrupt_json(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidConfig) as exc_info:
        ConfigStore(tmp_path).load("broken")
    assert exc_info.value.errors[0].startswith("broken.json is not valid JSON")


def test_load_config_with_wrong_shape(tmp_path):
    (tmp_path / "users.json").write_text(json.dumps({"table": "users", "fields": "nope"}), encoding="utf-8")
    with pytest.raises(InvalidConfig) as exc_info:
        ConfigStore(tmp_path).load("users")
    assert exc_info.value.errors[0].startswith("fields: ")

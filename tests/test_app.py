import json

from app import DEFAULT_CONFIG, AppContext, load_or_create_config


def test_missing_config_is_created_with_defaults(tmp_path):
    path = tmp_path / "config.json"

    config = load_or_create_config(str(path))

    assert config == DEFAULT_CONFIG
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG


def test_user_config_overrides_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"on_corrupt": "raise", "canvas_width": 800}), encoding="utf-8")

    config = load_or_create_config(str(path))

    assert config["on_corrupt"] == "raise"
    assert config["canvas_width"] == 800
    assert config["notes_key"] == DEFAULT_CONFIG["notes_key"]


def test_broken_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")

    assert load_or_create_config(str(path)) == DEFAULT_CONFIG


def test_app_context_wires_stores(tmp_path):
    config = dict(DEFAULT_CONFIG, storage_path=str(tmp_path / "data"), canvas_width=64, canvas_height=32)
    context = AppContext(config)

    note = context.manager.create_note("Hello", "world")

    assert (tmp_path / "data" / "preferences.ini").exists()
    assert context.storage.load_all() == [note]
    assert context.file_store.notes_dir == str((tmp_path / "data" / "notes"))
    assert context.file_store.canvas_width == 64


def test_app_context_reopens_existing_data(tmp_path):
    config = dict(DEFAULT_CONFIG, storage_path=str(tmp_path / "data"))
    note = AppContext(config).manager.create_note("Persisted")

    assert AppContext(config).manager.list_notes() == [note]

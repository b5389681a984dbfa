# app.py

import sys
import os
import json
import copy

from utils import setup_logger, get_logger
from storage.preferences import QtSettingsStore
from storage.local import LocalNoteStorage, DEFAULT_NOTES_KEY
from storage.files import LocalFileStore
from backend.manager import NoteManager

CONFIG_FILE = "config.json"

DEFAULT_CONFIG = {
    "storage_path": "./my_notes_data",
    # 留空则使用 <storage_path>/preferences.ini
    "settings_file": "",
    "notes_key": DEFAULT_NOTES_KEY,
    # 笔记数据无法解析时: backup / discard / raise
    "on_corrupt": "backup",
    "canvas_width": 500,
    "canvas_height": 500,
    "log_level": "INFO",
    "log_file": ""
}

logger = get_logger()


def resolve_path(relative_path):
    if os.path.isabs(relative_path):
        return relative_path
    if getattr(sys, 'frozen', False):
        base_path = os.path.dirname(sys.executable)
    else:
        base_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base_path, relative_path)


def load_or_create_config(path=None):
    path = path or resolve_path(CONFIG_FILE)
    if not os.path.exists(path):
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(DEFAULT_CONFIG, f, indent=4)
        except OSError as e:
            logger.warning(f"⚠️ Could not write default config to {path}: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
        final_config = copy.deepcopy(DEFAULT_CONFIG)
        final_config.update(user_config)
        return final_config
    except (OSError, ValueError) as e:
        logger.warning(f"⚠️ Invalid config {path}, using defaults: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)


class AppContext:
    """
    组装存储层，供 UI 层通过引用使用
    偏好存储 -> LocalNoteStorage, 笔记目录 -> LocalFileStore, 两者 -> NoteManager
    """

    def __init__(self, config=None):
        self.config = config if config is not None else load_or_create_config()
        setup_logger(level=self.config.get("log_level", "INFO"),
                     log_file=self.config.get("log_file") or None)

        storage_path = resolve_path(self.config["storage_path"])
        settings_file = self.config.get("settings_file") or os.path.join(storage_path, "preferences.ini")

        self.preferences = QtSettingsStore(resolve_path(settings_file))
        self.storage = LocalNoteStorage(
            self.preferences,
            key=self.config.get("notes_key", DEFAULT_NOTES_KEY),
            on_corrupt=self.config.get("on_corrupt", "backup"),
        )
        self.file_store = LocalFileStore(
            base_dir=storage_path,
            canvas_width=int(self.config.get("canvas_width", 500)),
            canvas_height=int(self.config.get("canvas_height", 500)),
        )
        self.manager = NoteManager(storage=self.storage, file_store=self.file_store)
        logger.info(f"✅ Note store ready at {storage_path}")

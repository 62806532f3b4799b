"""Fixtures for CLI tests."""

import json
import logging

import pytest
import yaml


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() so later tests see pytest's handlers again."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def user_schema(tmp_path):
    """A YAML schema for a small user record."""
    path = tmp_path / "user.schema.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "trim": True, "minLength": 2},
                    "age": {"toInteger": True, "minimum": 18},
                },
            },
            sort_keys=False,
        )
    )
    return path


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document into tmp_path and return its path."""

    def write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return write

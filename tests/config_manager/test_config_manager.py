import pytest
import io
import threading
import time
from unittest.mock import patch

from modules.config_manager.config_manager import (
    ConfigurationManager,
    LookupKind,
    get_configuration_manager,
    parse_settings,
)
from utils.exceptions import ConfigSourceMissing, ConfigIOError, ConfigNotFound, ConfigurationError

@pytest.fixture
def config_manager():
    """Provides an isolated (non-shared) ConfigurationManager."""
    return ConfigurationManager()

@pytest.fixture
def config_file(tmp_path):
    """Creates a config file mixing valid, comment, blank and malformed lines."""
    path = tmp_path / "config.txt"
    path.write_text(
        "a=1\n"
        "# comment\n"
        "\n"
        "b = two words\n"
        "nocolonhere\n",
        encoding="utf-8"
    )
    return path

@pytest.fixture
def fresh_singleton(monkeypatch):
    """Clears the shared instance for the duration of a test."""
    monkeypatch.setattr(ConfigurationManager, "_instance", None)

# --- Parsing ---

def test_parse_settings_mixed_lines():
    settings, malformed = parse_settings(["a=1", "  # c", "", "b = two words", "nocolonhere"])
    assert settings == {"a": "1", "b": "two words"}
    assert malformed == [5]

def test_parse_settings_value_keeps_extra_separators():
    settings, _ = parse_settings(["url = host=db;port=5432"])
    assert settings == {"url": "host=db;port=5432"}

def test_parse_settings_indented_comment_and_empty_value():
    settings, malformed = parse_settings(["   #indented=comment", "empty="])
    assert settings == {"empty": ""}
    assert malformed == []

# --- load_once ---

def test_load_once_scenario(config_manager, config_file):
    config_manager.load_once(config_file)

    assert config_manager.loaded is True
    assert config_manager.snapshot() == {"a": "1", "b": "two words"}

def test_load_once_is_idempotent(config_manager, config_file, tmp_path):
    other = tmp_path / "other.txt"
    other.write_text("a=changed\nc=3\n", encoding="utf-8")

    config_manager.load_once(config_file)
    config_manager.load_once(other)
    config_manager.load_once(config_file)

    assert config_manager.snapshot() == {"a": "1", "b": "two words"}

def test_load_once_skips_resource_after_success(config_manager, config_file):
    config_manager.load_once(config_file)
    with patch('builtins.open') as mock_open:
        config_manager.load_once(config_file)
    mock_open.assert_not_called()

def test_load_once_missing_file(config_manager, tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(ConfigSourceMissing, match="Configuration file not found: .*nope.txt") as exc_info:
        config_manager.load_once(missing)

    assert exc_info.value.path == str(missing)
    assert config_manager.loaded is False
    assert isinstance(exc_info.value, ConfigurationError)

def test_load_once_after_missing_file_can_succeed(config_manager, config_file, tmp_path):
    with pytest.raises(ConfigSourceMissing):
        config_manager.load_once(tmp_path / "nope.txt")

    config_manager.load_once(config_file)
    assert config_manager.loaded is True

def test_load_once_read_failure_wraps_cause(config_manager, config_file):
    with patch('builtins.open', side_effect=PermissionError("denied")):
        with pytest.raises(ConfigIOError, match="denied") as exc_info:
            config_manager.load_once(config_file)

    assert isinstance(exc_info.value.cause, PermissionError)
    assert exc_info.value.__cause__ is exc_info.value.cause
    assert config_manager.loaded is False
    assert config_manager.snapshot() == {}

def test_load_once_directory_is_io_error(config_manager, tmp_path):
    with pytest.raises(ConfigIOError):
        config_manager.load_once(tmp_path)
    assert config_manager.loaded is False

def test_load_once_undecodable_file(config_manager, tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"a=\xff\xfe\n")
    with pytest.raises(ConfigIOError):
        config_manager.load_once(path)
    assert config_manager.loaded is False

def test_load_once_keeps_values_set_before_load(config_manager, config_file):
    config_manager.set("pre", "existing")
    config_manager.set("a", "old")
    config_manager.load_once(config_file)

    assert config_manager.get("pre") == "existing"
    assert config_manager.get("a") == "1"

# --- get / get_or_default / lookup / set ---

def test_get_missing_key_mentions_key(config_manager):
    with pytest.raises(ConfigNotFound, match="unknownKey") as exc_info:
        config_manager.get("unknownKey")
    assert exc_info.value.key == "unknownKey"

def test_get_or_default(config_manager):
    config_manager.set("present", "v")
    assert config_manager.get_or_default("present", "d") == "v"
    assert config_manager.get_or_default("absent", "d") == "d"
    assert config_manager.get_or_default("absent") is None

def test_set_then_get(config_manager):
    config_manager.set("x", "1")
    config_manager.set("x", "2")
    assert config_manager.get("x") == "2"

def test_lookup_reports_kind(config_manager):
    config_manager.set("k", "v")

    hit = config_manager.lookup("k")
    miss = config_manager.lookup("missing")

    assert hit.found and hit.value == "v" and hit.kind is LookupKind.FOUND
    assert not miss.found and miss.value is None and miss.kind is LookupKind.MISSING
    assert miss.key == "missing"

def test_snapshot_is_a_copy(config_manager):
    config_manager.set("k", "v")
    snap = config_manager.snapshot()
    snap["k"] = "changed"
    assert config_manager.get("k") == "v"

# --- save ---

def test_save_then_load_round_trip(config_manager, tmp_path):
    config_manager.set("name", "demo app")
    config_manager.set("url", "a=b")
    config_manager.set("empty", "")
    saved = tmp_path / "out" / "saved.txt"

    config_manager.save(saved)

    reloaded = ConfigurationManager()
    reloaded.load_once(saved)
    assert reloaded.snapshot() == config_manager.snapshot()

def test_save_format_and_overwrite(config_manager, tmp_path):
    saved = tmp_path / "saved.txt"
    saved.write_text("# old content\nstale=1\n", encoding="utf-8")
    config_manager.set("b", "2")
    config_manager.set("a", "1")

    config_manager.save(saved)

    assert saved.read_text(encoding="utf-8") == "a=1\nb=2\n"

def test_save_failure_leaves_state(config_manager, tmp_path):
    config_manager.set("k", "v")
    with patch('builtins.open', side_effect=OSError("disk full")):
        with pytest.raises(ConfigIOError, match="disk full"):
            config_manager.save(tmp_path / "saved.txt")
    assert config_manager.snapshot() == {"k": "v"}

# --- dump_all ---

def test_dump_all_writes_and_returns_listing(config_manager):
    config_manager.set("b", "2")
    config_manager.set("a", "1")
    stream = io.StringIO()

    listing = config_manager.dump_all(stream)

    assert listing == "=== CONFIG ===\na = 1\nb = 2\n"
    assert stream.getvalue() == listing

def test_dump_all_defaults_to_stdout(config_manager, capsys):
    config_manager.set("k", "v")
    config_manager.dump_all()
    assert "k = v" in capsys.readouterr().out

# --- Shared instance ---

def test_get_instance_returns_same_object(fresh_singleton):
    assert ConfigurationManager.get_instance() is ConfigurationManager.get_instance()
    assert get_configuration_manager() is ConfigurationManager.get_instance()

def test_direct_construction_is_independent(fresh_singleton):
    assert ConfigurationManager() is not ConfigurationManager.get_instance()

def test_concurrent_first_access_constructs_once():
    constructed = []

    class SlowManager(ConfigurationManager):
        _instance = None

        def __init__(self):
            constructed.append(1)
            time.sleep(0.05)
            super().__init__()

    n_threads = 8
    barrier = threading.Barrier(n_threads)
    refs = []
    refs_lock = threading.Lock()

    def worker():
        barrier.wait()
        ref = SlowManager.get_instance()
        with refs_lock:
            refs.append(ref)

    threads = [threading.Thread(target=worker) for _ in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(refs) == n_threads
    assert all(ref is refs[0] for ref in refs)
    assert len(constructed) == 1

def test_concurrent_set_and_get(config_manager):
    def writer(prefix):
        for i in range(200):
            config_manager.set(f"{prefix}.{i}", str(i))

    threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    snap = config_manager.snapshot()
    assert len(snap) == 800
    assert config_manager.get("t3.199") == "199"

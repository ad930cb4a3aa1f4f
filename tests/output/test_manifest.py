import json
from pathlib import Path

from agentrc import __version__
from agentrc.output.manifest import Manifest, ManifestEntry, ManifestRepository


def test_save_and_load_round_trip_sorted(tmp_path: Path):
    repository = ManifestRepository(tmp_path)
    manifest = Manifest(
        files=[
            ManifestEntry("b.md", "222"),
            ManifestEntry(".claude/settings.json", "111", ("hooks.PostToolUse",)),
        ]
    )

    repository.save(manifest)

    payload = json.loads(repository.path.read_text(encoding="utf-8"))
    assert payload == {
        "version": __version__,
        "files": [
            {"path": ".claude/settings.json", "checksum": "111", "owned_keys": ["hooks.PostToolUse"]},
            {"path": "b.md", "checksum": "222"},
        ],
    }
    loaded = repository.load()
    assert loaded.get("b.md") == ManifestEntry("b.md", "222")
    assert loaded.get("missing.md") is None


def test_missing_manifest_loads_as_none(tmp_path: Path):
    assert ManifestRepository(tmp_path).load() is None


def test_corrupt_manifest_is_ignored(tmp_path: Path):
    repository = ManifestRepository(tmp_path)
    repository.path.parent.mkdir(parents=True)
    repository.path.write_text("{not json", encoding="utf-8")

    assert repository.load() is None


def test_delete(tmp_path: Path):
    repository = ManifestRepository(tmp_path)
    assert not repository.delete()

    repository.save(Manifest())
    assert repository.delete()
    assert not repository.path.exists()

from pathlib import Path

import pytest

from agentrc.core.loader import SourceRepository, collect_skill_files, load_agentrc
from agentrc.errors import (
    ConfigError,
    InvalidConfigError,
    SourceNotFoundError,
    UnreadableSourceError,
)


def test_missing_source_dir_raises(tmp_path: Path):
    with pytest.raises(SourceNotFoundError, match="No .agentrc/ directory found"):
        load_agentrc(tmp_path)


def test_missing_config_raises(tmp_path: Path):
    (tmp_path / ".agentrc").mkdir()

    with pytest.raises(SourceNotFoundError, match="Missing required config file"):
        load_agentrc(tmp_path)


def test_invalid_config_names_the_file(tmp_path: Path, write_sources):
    write_sources(tmp_path, {"config.yaml": 'version: "1"\ntargets: [nope]\n'})

    with pytest.raises(InvalidConfigError) as excinfo:
        load_agentrc(tmp_path)

    assert excinfo.value.path == tmp_path / ".agentrc" / "config.yaml"


def test_load_reads_every_source_kind(project: Path):
    source = load_agentrc(project)

    assert [item.name for item in source.rules] == ["style", "testing", "typescript"]
    assert [item.name for item in source.commands] == ["deploy"]
    assert [item.name for item in source.agents] == ["reviewer"]
    assert source.skills[0].name == "pdf-tools"
    assert source.skills[0].description == "Work with PDFs"
    assert source.skills[0].content == "Extract text from PDFs."


def test_only_markdown_documents_are_loaded(tmp_path: Path, write_sources):
    write_sources(
        tmp_path,
        {
            "config.yaml": 'version: "1"\n',
            "rules/keep.md": "Keep me.\n",
            "rules/notes.txt": "Not a rule.\n",
            "rules/.hidden.md": "Hidden.\n",
        },
    )

    source = load_agentrc(tmp_path)

    assert [item.name for item in source.rules] == ["keep"]


def test_skill_dirs_without_skill_file_are_skipped(tmp_path: Path, write_sources):
    write_sources(
        tmp_path,
        {
            "config.yaml": 'version: "1"\n',
            "skills/empty/notes.md": "No SKILL.md here.\n",
        },
    )

    assert SourceRepository(tmp_path).load().skills == []


def test_skill_files_skip_binary_content(tmp_path: Path):
    skill_dir = tmp_path / "skill"
    (skill_dir / "scripts").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("Skill body\n", encoding="utf-8")
    (skill_dir / "scripts" / "run.sh").write_text("echo hi\n", encoding="utf-8")
    (skill_dir / "logo.png").write_bytes(b"\x89PNG\r\n")
    (skill_dir / "blob.dat").write_bytes(b"\xff\xfe\x00\x81")

    files = collect_skill_files(skill_dir)

    assert files == {"scripts/run.sh": "echo hi\n"}


@pytest.mark.parametrize("directory", ["rules", "commands", "agents"])
def test_non_utf8_document_is_a_config_error(project: Path, directory: str):
    bad = project / ".agentrc" / directory / "bad.md"
    bad.write_bytes(b"\xff\xfe not text \x80")

    with pytest.raises(UnreadableSourceError) as excinfo:
        load_agentrc(project)

    assert isinstance(excinfo.value, ConfigError)
    assert excinfo.value.path == bad
    assert "not valid UTF-8 text" in str(excinfo.value)

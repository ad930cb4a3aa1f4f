"""Read an ``.agentrc/`` source tree into a LoadedSource."""

from __future__ import annotations

import logging
from pathlib import Path

from agentrc.constants import (
    AGENTS_DIRNAME,
    COMMANDS_DIRNAME,
    CONFIG_FILENAME,
    RULES_DIRNAME,
    SKILL_FILENAME,
    SKILL_SKIP_EXTENSIONS,
    SKILL_SKIP_NAMES,
    SKILLS_DIRNAME,
    SOURCE_DIRNAME,
)
from agentrc.core.config import parse_config
from agentrc.core.frontmatter import parse_frontmatter
from agentrc.core.source import LoadedSource, SkillSource, SourceDocument
from agentrc.errors import SourceNotFoundError, UnreadableSourceError

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise UnreadableSourceError(path, "not valid UTF-8 text") from exc


class SourceRepository:
    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    @property
    def source_dir(self) -> Path:
        return self._root / SOURCE_DIRNAME

    @property
    def config_path(self) -> Path:
        return self.source_dir / CONFIG_FILENAME

    def load(self) -> LoadedSource:
        if not self.source_dir.is_dir():
            raise SourceNotFoundError(self._root, f"No {SOURCE_DIRNAME}/ directory found")
        if not self.config_path.is_file():
            raise SourceNotFoundError(self.config_path, "Missing required config file")

        config = parse_config(read_source(self.config_path), path=self.config_path)
        source = LoadedSource(
            config=config,
            rules=self.list_documents(self.source_dir / RULES_DIRNAME),
            commands=self.list_documents(self.source_dir / COMMANDS_DIRNAME),
            skills=self.list_skills(self.source_dir / SKILLS_DIRNAME),
            agents=self.list_documents(self.source_dir / AGENTS_DIRNAME),
        )
        logger.debug(
            "Loaded %d rules, %d commands, %d skills, %d agents from %s",
            len(source.rules),
            len(source.commands),
            len(source.skills),
            len(source.agents),
            self.source_dir,
        )
        return source

    @staticmethod
    def list_documents(directory: Path) -> list[SourceDocument]:
        if not directory.is_dir():
            return []
        documents: list[SourceDocument] = []
        for child in sorted(directory.iterdir()):
            if child.suffix != ".md" or child.name.startswith(".") or not child.is_file():
                continue
            parsed = parse_frontmatter(read_source(child))
            documents.append(SourceDocument(name=child.stem, parsed=parsed, source_path=child))
        return documents

    def list_skills(self, directory: Path) -> list[SkillSource]:
        if not directory.is_dir():
            return []
        skills: list[SkillSource] = []
        for child in sorted(directory.iterdir()):
            if not child.is_dir():
                continue
            skill = self.load_skill(child)
            if skill is None:
                logger.debug("Skipping %s: no %s", child, SKILL_FILENAME)
                continue
            skills.append(skill)
        return skills

    @staticmethod
    def load_skill(skill_dir: Path) -> SkillSource | None:
        skill_path = skill_dir / SKILL_FILENAME
        if not skill_path.is_file():
            return None
        parsed = parse_frontmatter(read_source(skill_path))
        return SkillSource(
            name=skill_dir.name,
            description=parsed.frontmatter.description or "",
            content=parsed.content,
            source_path=skill_path,
            files=collect_skill_files(skill_dir),
        )


def collect_skill_files(skill_dir: Path) -> dict[str, str]:
    """Supporting text files of a skill keyed by forward-slash relative path."""
    files: dict[str, str] = {}
    for path in sorted(skill_dir.rglob("*")):
        if not path.is_file() or path.name in SKILL_SKIP_NAMES:
            continue
        if path.suffix.lower() in SKILL_SKIP_EXTENSIONS:
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping non-text skill file %s", path)
            continue
        files[path.relative_to(skill_dir).as_posix()] = content
    return files


def load_agentrc(root: Path) -> LoadedSource:
    return SourceRepository(root).load()

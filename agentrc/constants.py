from typing import Final


SOURCE_DIRNAME: Final[str] = ".agentrc"
CONFIG_FILENAME: Final[str] = "config.yaml"
RULES_DIRNAME: Final[str] = "rules"
COMMANDS_DIRNAME: Final[str] = "commands"
SKILLS_DIRNAME: Final[str] = "skills"
AGENTS_DIRNAME: Final[str] = "agents"
HOOKS_DIRNAME: Final[str] = "hooks"
SKILL_FILENAME: Final[str] = "SKILL.md"

MANIFEST_FILENAME: Final[str] = ".manifest.json"
BACKUP_DIRNAME: Final[str] = ".backup"
GITIGNORE_FILENAME: Final[str] = ".gitignore"

GENERATED_MARKER: Final[str] = "Generated by agentrc. Do not edit; changes will be overwritten."
GENERATED_JSON_KEY: Final[str] = "_generated"

RULE_CHAR_LIMIT: Final[int] = 6_000
TOTAL_CHAR_LIMIT: Final[int] = 12_000

SKILL_SKIP_NAMES: Final[frozenset[str]] = frozenset({SKILL_FILENAME, ".DS_Store"})
SKILL_SKIP_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".bmp",
        ".ico",
        ".webp",
        ".svg",
        ".woff",
        ".woff2",
        ".ttf",
        ".eot",
        ".otf",
        ".zip",
        ".tar",
        ".gz",
        ".bz2",
        ".7z",
        ".rar",
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".bin",
        ".pdf",
        ".doc",
        ".docx",
        ".xls",
        ".xlsx",
        ".mp3",
        ".mp4",
        ".wav",
        ".avi",
        ".mov",
    }
)

import json

import pytest

from agentrc.constants import GENERATED_JSON_KEY, GENERATED_MARKER
from agentrc.output.markers import add_marker, has_marker, marker_line


@pytest.mark.parametrize(
    "path,prefix",
    [
        ("AGENTS.md", "<!--"),
        (".cursor/rules/a.mdc", "<!--"),
        (".gemini/commands/a.toml", "#"),
        ("hooks/run.sh", "#"),
        ("tool.py", "#"),
        ("config.yml", "#"),
        ("lib/index.ts", "//"),
        ("lib/index.js", "//"),
    ],
)
def test_marker_syntax_per_file_type(path, prefix):
    line = marker_line(path)

    assert line is not None
    assert line.startswith(prefix)
    assert GENERATED_MARKER in line


def test_unknown_types_are_left_unmarked():
    assert marker_line("notes.txt") is None
    assert add_marker("notes.txt", "plain\n") == "plain\n"


def test_markdown_marker_goes_after_frontmatter():
    content = "---\ntrigger: always_on\n---\n\nBody\n"

    marked = add_marker("rule.md", content)

    assert marked.startswith("---\ntrigger: always_on\n---\n<!-- ")
    assert marked.endswith("\nBody\n")
    assert has_marker("rule.md", marked)


def test_markdown_without_frontmatter_starts_with_marker():
    marked = add_marker("AGENTS.md", "# Title\n")

    assert marked == f"<!-- {GENERATED_MARKER} -->\n# Title\n"


def test_shebang_stays_first():
    marked = add_marker("run.sh", "#!/bin/sh\necho hi\n")

    assert marked == f"#!/bin/sh\n# {GENERATED_MARKER}\necho hi\n"


def test_toml_marker_is_a_comment_before_fields():
    marked = add_marker("deploy.toml", 'description = "x"\n')

    assert marked.splitlines()[0] == f"# {GENERATED_MARKER}"


def test_json_marker_is_the_first_key():
    marked = add_marker("out.json", '{"a": 1}\n')

    payload = json.loads(marked)
    assert list(payload) == [GENERATED_JSON_KEY, "a"]
    assert has_marker("out.json", marked)
    assert not has_marker("out.json", '{"a": 1}')
    assert not has_marker("out.json", "not json")


def test_has_marker_requires_exact_line():
    assert not has_marker("a.md", "mentions Generated by agentrc somewhere\n")

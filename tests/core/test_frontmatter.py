from agentrc.core.frontmatter import parse_frontmatter, split_frontmatter
from agentrc.core.ir import Priority


def test_parse_frontmatter_reads_rule_fields():
    parsed = parse_frontmatter(
        "---\nglobs: ['src/**/*.py']\nalwaysApply: false\npriority: HIGH\n---\n\nBody text\n"
    )

    assert parsed.frontmatter.globs == ["src/**/*.py"]
    assert parsed.frontmatter.always_apply is False
    assert parsed.frontmatter.priority == Priority.HIGH
    assert parsed.content == "Body text"


def test_single_string_values_become_lists():
    parsed = parse_frontmatter("---\nglobs: '*.ts'\ntools: Read\naliases: ship\n---\nBody\n")

    assert parsed.frontmatter.globs == ["*.ts"]
    assert parsed.frontmatter.tools == ["Read"]
    assert parsed.frontmatter.aliases == ["ship"]


def test_snake_case_always_apply_is_accepted():
    parsed = parse_frontmatter("---\nalways_apply: true\n---\nBody\n")

    assert parsed.frontmatter.always_apply is True


def test_unknown_priority_falls_back_to_normal():
    parsed = parse_frontmatter("---\npriority: urgent\n---\nBody\n")

    assert parsed.frontmatter.priority == Priority.NORMAL


def test_missing_frontmatter_keeps_whole_body():
    parsed = parse_frontmatter("# Title\n\nSome text\n")

    assert parsed.frontmatter.globs is None
    assert parsed.frontmatter.description is None
    assert parsed.content == "# Title\n\nSome text"


def test_malformed_yaml_is_treated_as_body():
    text = "---\nglobs: [unclosed\n---\nBody\n"

    raw, body = split_frontmatter(text)

    assert raw == {}
    assert body == text


def test_non_mapping_frontmatter_is_ignored():
    raw, body = split_frontmatter("---\n- a\n- b\n---\nBody\n")

    assert raw == {}
    assert body.startswith("---")

import pytest

from agentrc.core.config import parse_config
from agentrc.core.ir import HookEvent
from agentrc.errors import ConfigError, InvalidConfigError


def test_parse_config_reads_targets_and_hooks():
    config = parse_config(
        'version: "1"\n'
        "targets: [claude, windsurf]\n"
        "hooks:\n"
        "  - event: pre-commit\n"
        "    run: hooks/lint.sh\n"
        "    description: Lint staged files\n"
    )

    assert config.version == "1"
    assert config.targets == ["claude", "windsurf"]
    assert config.hooks[0].event == HookEvent.PRE_COMMIT
    assert config.hooks[0].match is None


def test_minimal_config_has_no_targets():
    config = parse_config('version: "1"\n')

    assert config.targets == []
    assert config.hooks == []


@pytest.mark.parametrize(
    "text,fragment",
    [
        ("targets: [claude]\n", "'version' is a required property"),
        ('version: "2"\n', "/version"),
        ('version: "1"\ntargets: [vscode]\n', "/targets/0"),
        ('version: "1"\nextra: true\n', "Additional properties"),
        ('version: "1"\nhooks:\n  - event: on-save\n    run: x\n    description: y\n', "/hooks/0/event"),
        ('version: "1"\nhooks:\n  - event: post-edit\n    run: x\n', "'description' is a required property"),
    ],
)
def test_invalid_config_is_rejected(text, fragment):
    with pytest.raises(InvalidConfigError) as excinfo:
        parse_config(text)

    assert fragment in str(excinfo.value)


def test_non_mapping_config_is_rejected():
    with pytest.raises(InvalidConfigError, match="YAML mapping"):
        parse_config("- claude\n- cursor\n")


def test_invalid_yaml_is_a_config_error():
    with pytest.raises(ConfigError, match="not valid YAML"):
        parse_config("version: [1\n")

import pytest

from agentrc.adapters.base import AdapterResult, FeatureCategory, IAdapter
from agentrc.adapters.profiles import PROFILE_NAMES, default_profiles
from agentrc.adapters.registry import AdapterRegistry, create_default_registry
from agentrc.core.ir import IR
from agentrc.errors import AdapterNotFoundError, ConfigError

ALL_TARGETS = [
    "claude",
    "cursor",
    "copilot",
    "windsurf",
    "cline",
    "gemini",
    "codex",
    "generic-markdown",
    "aider",
    "junie",
    "amazonq",
    "amp",
    "roo",
]


class _StubAdapter(IAdapter):
    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, ir: IR) -> AdapterResult:
        return AdapterResult()


def _mentions(result: AdapterResult, text: str) -> bool:
    return any(text in item.path or text in item.content for item in result.files)


def _tagged(result: AdapterResult, category: FeatureCategory) -> bool:
    if category.value in result.native_features:
        return True
    return any(tag.startswith(f"{category.value} (") for tag in result.degraded_features)


def test_default_registry_has_every_target_in_order():
    registry = create_default_registry()

    assert registry.names() == ALL_TARGETS
    assert list(PROFILE_NAMES) == ALL_TARGETS
    assert len(registry) == 13
    assert "windsurf" in registry


def test_unknown_adapter_lists_available_names():
    registry = create_default_registry()

    with pytest.raises(AdapterNotFoundError) as excinfo:
        registry.get("vscode")

    message = str(excinfo.value)
    assert message.startswith('Unknown adapter "vscode". Available adapters: ')
    for name in ALL_TARGETS:
        assert name in message
    assert isinstance(excinfo.value, ConfigError)


def test_resolve_fails_before_returning_anything():
    registry = AdapterRegistry([_StubAdapter("one"), _StubAdapter("two")])

    assert [adapter.name for adapter in registry.resolve(["two", "one"])] == ["two", "one"]
    with pytest.raises(AdapterNotFoundError):
        registry.resolve(["one", "three"])


def test_duplicate_registration_is_rejected():
    registry = AdapterRegistry([_StubAdapter("one")])

    with pytest.raises(ValueError, match="already registered"):
        registry.register(_StubAdapter("one"))


def test_stub_adapter_has_no_managed_dirs():
    assert _StubAdapter("one").managed_dirs == ()


@pytest.mark.parametrize("target", ALL_TARGETS)
def test_generation_is_deterministic(target, sample_ir):
    adapter = create_default_registry().get(target)

    assert adapter.generate(sample_ir) == adapter.generate(sample_ir)


@pytest.mark.parametrize("target", ALL_TARGETS)
def test_every_rule_and_feature_is_traceable(target, sample_ir):
    result = create_default_registry().get(target).generate(sample_ir)

    for rule in sample_ir.rules:
        assert _mentions(result, rule.name), rule.name
    for item in (*sample_ir.commands, *sample_ir.skills, *sample_ir.agents):
        assert _mentions(result, item.name), item.name

    profile = {profile.name: profile for profile in default_profiles()}[target]
    for category in (
        FeatureCategory.HOOKS,
        FeatureCategory.COMMANDS,
        FeatureCategory.SKILLS,
        FeatureCategory.AGENTS,
    ):
        assert _tagged(result, category) != (category in profile.omitted), category


@pytest.mark.parametrize("target", ALL_TARGETS)
def test_instructions_always_native_and_tags_unique(target, sample_ir):
    result = create_default_registry().get(target).generate(sample_ir)

    assert "instructions" in result.native_features
    assert len(set(result.native_features)) == len(result.native_features)
    assert len(set(result.degraded_features)) == len(result.degraded_features)
    assert not set(result.native_features) & set(result.degraded_features)


@pytest.mark.parametrize("target", ALL_TARGETS)
def test_paths_are_relative_and_unique(target, sample_ir):
    result = create_default_registry().get(target).generate(sample_ir)
    paths = result.paths()

    assert len(paths) == len(set(paths))
    for path in paths:
        assert not path.startswith("/")
        assert ".." not in path.split("/")


def test_hooks_are_omitted_only_where_unsupported():
    omitted = {
        profile.name for profile in default_profiles() if FeatureCategory.HOOKS in profile.omitted
    }

    assert omitted == {"cursor", "copilot", "gemini"}


@pytest.mark.parametrize("target", ALL_TARGETS)
def test_empty_ir_produces_no_files(target):
    result = create_default_registry().get(target).generate(IR())

    assert result.files == ()
    assert result.native_features == ("instructions",)
    assert result.warnings == ()

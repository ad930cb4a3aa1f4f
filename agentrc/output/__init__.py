from agentrc.output.gitignore import remove_gitignore_block, update_gitignore
from agentrc.output.manifest import Manifest, ManifestEntry, ManifestRepository
from agentrc.output.models import BuildReport, TargetReport, WriteState
from agentrc.output.writer import OutputWriter

__all__ = [
    "BuildReport",
    "Manifest",
    "ManifestEntry",
    "ManifestRepository",
    "OutputWriter",
    "TargetReport",
    "WriteState",
    "remove_gitignore_block",
    "update_gitignore",
]

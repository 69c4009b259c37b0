"""
Must-gather snapshot schema.

Read-only contract between whatever extracts a must-gather archive and the
HTML renderer. The renderer only relies on the ``Resource`` protocol, so any
object with a name, a safe identifier, an error flag and raw text will do.
"""

from typing import ClassVar, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ._util import safe_identifier

SCHEMA_VERSION = 1


@runtime_checkable
class Resource(Protocol):
    """Anything the report can show as a collapsible detail item."""

    name: str

    def safename(self) -> str:
        ...

    def is_error(self) -> bool:
        ...

    def raw(self) -> str:
        ...


# --- Concrete resource kinds ---


class _ResourceBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    manifest: str = ""  # full YAML as found in the must-gather

    kind: ClassVar[str] = "resource"

    def safename(self) -> str:
        return f"{self.kind}-{safe_identifier(self.name)}"

    def is_error(self) -> bool:
        return False

    def raw(self) -> str:
        return self.manifest


class Node(_ResourceBase):
    """A cluster node; flagged when its Ready condition is not True."""

    kind: ClassVar[str] = "node"

    ready: bool = True

    def is_error(self) -> bool:
        return not self.ready


class Machine(_ResourceBase):
    """A Machine API machine; flagged unless it reached the Running phase."""

    kind: ClassVar[str] = "machine"

    phase: Optional[str] = None

    def is_error(self) -> bool:
        return self.phase != "Running"


class MachineSet(_ResourceBase):
    kind: ClassVar[str] = "machineset"

    replicas: int = 0
    ready_replicas: int = 0


# --- Root snapshot ---


class ReportModel(BaseModel):
    """Everything the report shows, as handed over by the archive parser."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = SCHEMA_VERSION
    title: str
    version: str = ""  # OpenShift cluster version
    nodes: List[Node] = Field(default_factory=list)
    machines: List[Machine] = Field(default_factory=list)
    machinesets: List[MachineSet] = Field(default_factory=list)

    def categories(self) -> List[Tuple[str, Sequence[Resource]]]:
        """Category titles paired with their resources, in report order."""
        return [
            ("Nodes", self.nodes),
            ("Machines", self.machines),
            ("MachineSets", self.machinesets),
        ]

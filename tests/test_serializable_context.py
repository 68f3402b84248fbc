"""Tests for SerializableGrailsLaunchContext."""

import tempfile
from pathlib import Path

import pytest

from grails_launcher.context import (
    DelegatingGrailsLaunchContext,
    GrailsLaunchContext,
    LaunchContextSnapshot,
    SerializableGrailsLaunchContext,
)
from grails_launcher.context.serializable import SNAPSHOT_PROPERTIES
from grails_launcher.exceptions import SnapshotLoadError
from grails_launcher.version import GrailsVersion
from tests.helpers.fake_grails import FakeBuildSettings, FakeConsole, Grails11BuildSettings, make_loader


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def context():
    ctx = SerializableGrailsLaunchContext(GrailsVersion.parse("2.0.0.RC1"), Path("/opt/grails"), Path("/work/app"))
    ctx.script_name = "WarMain"
    ctx.env = "production"
    ctx.classes_dir = Path("/work/app/target/classes")
    ctx.compile_dependencies = [Path("/lib/a.jar"), Path("/lib/b.jar")]
    ctx.dependencies_externally_configured = True
    return ctx


def test_implements_interface(context):
    assert isinstance(context, GrailsLaunchContext)


def test_defaults():
    ctx = SerializableGrailsLaunchContext(GrailsVersion(2, 1))
    assert ctx.grails_home is None
    assert ctx.script_name is None
    assert ctx.build_dependencies is None
    assert ctx.plain_output is False
    assert ctx.dependencies_externally_configured is False


def test_snapshot_covers_every_property():
    assert set(SNAPSHOT_PROPERTIES) | {"grails_version"} == set(LaunchContextSnapshot.model_fields)


def test_values_held_locally(context):
    assert context.script_name == "WarMain"
    assert context.classes_dir == Path("/work/app/target/classes")
    assert context.compile_dependencies == [Path("/lib/a.jar"), Path("/lib/b.jar")]


def test_to_dict_is_plain(context):
    data = context.to_dict()
    assert data["grails_version"] == "2.0.0.RC1"
    assert data["classes_dir"] == "/work/app/target/classes"
    assert data["compile_dependencies"] == ["/lib/a.jar", "/lib/b.jar"]
    assert data["test_dependencies"] is None


def test_dict_round_trip(context):
    restored = SerializableGrailsLaunchContext.from_dict(context.to_dict())
    assert restored.to_snapshot() == context.to_snapshot()
    assert restored.grails_version.tag == "RC1"


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Invalid launch context"):
        SerializableGrailsLaunchContext.from_dict({"grails_version": "2.1", "colour": "red"})


def test_from_dict_rejects_bad_version():
    with pytest.raises(ValueError):
        SerializableGrailsLaunchContext.from_dict({"grails_version": "latest"})


def test_snapshot_is_a_copy(context):
    snapshot = context.to_snapshot()
    snapshot.script_name = "Other"
    assert context.script_name == "WarMain"


def test_dump_and_load(context, temp_dir):
    path = context.dump(temp_dir / "nested" / "context.yaml")

    assert path.exists()
    restored = SerializableGrailsLaunchContext.load(path)

    assert restored.env == "production"
    assert restored.dependencies_externally_configured is True
    assert restored.compile_dependencies == [Path("/lib/a.jar"), Path("/lib/b.jar")]


def test_load_missing_file(temp_dir):
    with pytest.raises(SnapshotLoadError):
        SerializableGrailsLaunchContext.load(temp_dir / "absent.yaml")


def test_load_invalid_yaml(temp_dir):
    path = temp_dir / "bad.yaml"
    path.write_text("grails_version: [2.1\n")
    with pytest.raises(SnapshotLoadError, match="Invalid YAML"):
        SerializableGrailsLaunchContext.load(path)


def test_load_non_mapping(temp_dir):
    path = temp_dir / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(SnapshotLoadError, match="Root must be a dict"):
        SerializableGrailsLaunchContext.load(path)


def test_load_invalid_content(temp_dir):
    path = temp_dir / "invalid.yaml"
    path.write_text("script_name: TestApp\n")
    with pytest.raises(SnapshotLoadError) as exc_info:
        SerializableGrailsLaunchContext.load(path)
    assert exc_info.value.file_name == "invalid.yaml"


def test_capture_and_restore_delegating_context(context, temp_dir):
    FakeConsole.reset()
    delegating = DelegatingGrailsLaunchContext.copy_of(make_loader(FakeBuildSettings), context)

    captured = SerializableGrailsLaunchContext.copy_of(delegating)
    restored = SerializableGrailsLaunchContext.load(captured.dump(temp_dir / "ctx.yaml"))

    assert restored.script_name == "WarMain"
    assert restored.classes_dir == Path("/work/app/target/classes")
    assert restored.compile_dependencies == [Path("/lib/a.jar"), Path("/lib/b.jar")]
    FakeConsole.reset()


def test_invalid_assignment_raises_value_error(context):
    with pytest.raises(ValueError, match="dependencies_externally_configured"):
        context.dependencies_externally_configured = None
    assert context.dependencies_externally_configured is True


def test_invalid_dependency_list_raises_value_error(context):
    with pytest.raises(ValueError, match="compile_dependencies"):
        context.compile_dependencies = 42


def test_capture_legacy_delegating_context():
    delegating = DelegatingGrailsLaunchContext(
        GrailsVersion(1, 1), make_loader(Grails11BuildSettings), Path("/opt/grails"), Path("/work/app")
    )
    delegating.compile_dependencies = [Path("/lib/a.jar")]

    captured = SerializableGrailsLaunchContext.copy_of(delegating)

    assert captured.provided_dependencies is None
    assert captured.compile_dependencies == [Path("/lib/a.jar")]
    assert delegating.settings.unexpected_calls == []
    FakeConsole.reset()

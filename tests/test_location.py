from __future__ import annotations

from wizard.navigation.location import (
    LocationSynchronizer,
    MemoryLocation,
    QueryParamLocation,
    join_location,
    segment_from_location,
)

ROOT_PATH = "/create/custom"


def test_join_and_split_locations() -> None:
    assert join_location(ROOT_PATH, "settings") == "/create/custom/settings"
    assert join_location("create/custom/", "") == "/create/custom"
    assert segment_from_location("/create/custom/settings?x=1#top", ROOT_PATH) == "settings"
    assert segment_from_location("/create/custom", ROOT_PATH) == ""
    assert segment_from_location("/elsewhere/settings", ROOT_PATH) == ""


def test_mount_adopts_known_location_without_writing() -> None:
    port = MemoryLocation(f"{ROOT_PATH}/settings")
    sync = LocationSynchronizer(port, root_path=ROOT_PATH)
    assert sync.mount() == 2
    assert port.replace_count == 0
    assert sync.poll() is None


def test_mount_redirects_bare_and_unknown_locations() -> None:
    for start in (ROOT_PATH, f"{ROOT_PATH}/bogus"):
        port = MemoryLocation(start)
        sync = LocationSynchronizer(port, root_path=ROOT_PATH)
        assert sync.mount() == 1
        assert port.read() == f"{ROOT_PATH}/basic-info"
        assert port.replace_count == 1


def test_mount_prefers_resume_segment() -> None:
    port = MemoryLocation(f"{ROOT_PATH}/basic-info")
    sync = LocationSynchronizer(port, root_path=ROOT_PATH)
    assert sync.mount("summary") == 3
    assert port.read() == f"{ROOT_PATH}/summary"


def test_poll_ignores_own_writes_and_reports_external_changes() -> None:
    port = MemoryLocation(ROOT_PATH)
    sync = LocationSynchronizer(port, root_path=ROOT_PATH)
    sync.mount()
    port.push(f"{ROOT_PATH}/settings")
    sync.write(2)
    assert sync.poll() is None

    port.back()
    assert sync.poll() == 1
    assert sync.poll() is None


def test_poll_redirects_unknown_external_location() -> None:
    port = MemoryLocation(f"{ROOT_PATH}/settings")
    sync = LocationSynchronizer(port, root_path=ROOT_PATH)
    sync.mount()
    port.push(f"{ROOT_PATH}/nowhere")
    assert sync.poll() == 1
    assert port.read() == f"{ROOT_PATH}/basic-info"


def test_query_param_location_reads_and_writes_step(query_params) -> None:
    location = QueryParamLocation(root_path=ROOT_PATH)
    assert location.read() == ROOT_PATH

    location.replace(f"{ROOT_PATH}/summary")
    assert query_params["step"] == "summary"
    assert location.read() == f"{ROOT_PATH}/summary"

    location.replace(ROOT_PATH)
    assert "step" not in query_params

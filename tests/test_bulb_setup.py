import pytest

from cocuyo.bulb_setup import BulbInfo, BulbSetupEvent, BulbSetupState

MAC_A = "000000000001"
MAC_B = "000000000002"
MAC_C = "000000000003"


def _bulb(mac, ip="192.0.2.1", name=None):
    return BulbInfo(mac=mac, ip=ip, name=name)


@pytest.fixture
def state():
    return BulbSetupState([_bulb(MAC_A, name="Desk"), _bulb(MAC_B)], [MAC_A])


def test_unknown_selections_are_dropped():
    s = BulbSetupState([_bulb(MAC_A)], [MAC_A, MAC_C])
    assert s.selected_bulbs == frozenset({MAC_A})


def test_initial_state(state):
    assert state.is_scanning is False
    assert [b.mac for b in state.discovered_bulbs] == [MAC_A, MAC_B]
    assert state.has_selected_bulbs()


def test_no_selection():
    s = BulbSetupState([_bulb(MAC_A)], [])
    assert not s.has_selected_bulbs()
    assert s.selected_bulb_infos() == []


def test_begin_scan_sets_scanning_status(state):
    state.begin_scan()
    assert state.is_scanning
    assert state.status_text() == "Scanning..."


def test_discovery_updates_existing_and_appends_new(state):
    state.begin_scan()
    event = state.bulbs_discovered(
        [_bulb(MAC_A, ip="192.0.2.9"), _bulb(MAC_C, ip="192.0.2.3", name="Lamp")]
    )
    assert event is BulbSetupEvent.BULBS_DISCOVERED
    assert not state.is_scanning
    bulbs = state.discovered_bulbs
    assert [b.mac for b in bulbs] == [MAC_A, MAC_B, MAC_C]
    assert bulbs[0].ip == "192.0.2.9"
    assert bulbs[0].name == "Desk"
    assert bulbs[2].name == "Lamp"


def test_discovery_replaces_name_when_given(state):
    state.bulbs_discovered([_bulb(MAC_B, name="Shelf")])
    assert state.discovered_bulbs[1].name == "Shelf"


def test_discovery_does_not_duplicate_within_batch():
    s = BulbSetupState([], [])
    s.bulbs_discovered([_bulb(MAC_A, ip="192.0.2.1"), _bulb(MAC_A, ip="192.0.2.2")])
    assert len(s.discovered_bulbs) == 1
    assert s.discovered_bulbs[0].ip == "192.0.2.2"


def test_toggle_twice_restores_selection(state):
    before = state.selected_bulbs
    assert state.toggle_bulb(MAC_B) is BulbSetupEvent.SELECTION_CHANGED
    assert MAC_B in state.selected_bulbs
    state.toggle_bulb(MAC_B)
    assert state.selected_bulbs == before


def test_toggle_off_last_selection(state):
    state.toggle_bulb(MAC_A)
    assert not state.has_selected_bulbs()


def test_selected_infos_in_discovery_order(state):
    state.toggle_bulb(MAC_B)
    assert [b.mac for b in state.selected_bulb_infos()] == [MAC_A, MAC_B]


def test_status_text_counts(state):
    assert state.status_text() == "1 bulb selected"
    state.toggle_bulb(MAC_B)
    assert state.status_text() == "2 bulbs selected"


def test_done_event(state):
    assert state.done() is BulbSetupEvent.DONE


def test_label_and_detail():
    assert _bulb(MAC_A).label == "WiZ Bulb"
    named = _bulb(MAC_A, ip="192.0.2.5", name="Desk")
    assert named.label == "Desk"
    assert named.detail == f"192.0.2.5 - {MAC_A}"


def test_placeholder_text():
    s = BulbSetupState([], [])
    assert s.placeholder_text == "No bulbs found. Press Scan to discover."
    s.begin_scan()
    assert s.placeholder_text == "Scanning for bulbs..."


def test_discovered_bulbs_is_a_copy(state):
    state.discovered_bulbs.clear()
    assert len(state.discovered_bulbs) == 2
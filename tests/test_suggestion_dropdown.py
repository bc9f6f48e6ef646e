from backend.app.services.suggestion_dropdown import DropdownController, PointerDownHub


def test_only_one_row_open_and_highlight_resets():
    dropdown = DropdownController()
    dropdown.open(1)
    dropdown.highlight_next(3)
    assert dropdown.highlighted_index == 0

    dropdown.open(2)
    assert dropdown.is_open(2)
    assert not dropdown.is_open(1)
    assert dropdown.highlighted_index == -1


def test_highlight_is_clamped():
    dropdown = DropdownController()
    dropdown.open(1)
    for _ in range(5):
        dropdown.highlight_next(2)
    assert dropdown.highlighted_index == 1
    for _ in range(5):
        dropdown.highlight_previous()
    assert dropdown.highlighted_index == -1


def test_hover_sets_highlight_within_range():
    dropdown = DropdownController()
    dropdown.open(1)
    dropdown.hover(2, 3)
    assert dropdown.highlighted_index == 2
    dropdown.hover(3, 3)
    assert dropdown.highlighted_index == 2


def test_pointer_down_outside_open_row_closes():
    dropdown = DropdownController()
    dropdown.open(4)
    dropdown.pointer_down(4)
    assert dropdown.is_open(4)
    dropdown.pointer_down(None)
    assert dropdown.open_row is None


def test_row_removed_closes_its_dropdown_only():
    dropdown = DropdownController()
    dropdown.open(4)
    dropdown.row_removed(5)
    assert dropdown.is_open(4)
    dropdown.row_removed(4)
    assert dropdown.open_row is None


def test_pointer_hub_unsubscribe():
    hub = PointerDownHub()
    received = []
    unsubscribe = hub.subscribe(received.append)
    hub.publish(1)
    unsubscribe()
    unsubscribe()
    hub.publish(2)
    assert received == [1]
    assert hub.listener_count == 0

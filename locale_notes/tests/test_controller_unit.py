from locale_notes.internal_core.contracts import Coordinate
from locale_notes.internal_core.controller import AppController
from locale_notes.internal_core.errors import LocaleError
from locale_notes.internal_core.location import SimulatedLocationProvider
from locale_notes.internal_core.map import USER_LOCATION_HANDLE, InMemoryMapRenderer
from locale_notes.internal_core.messages import FixesReceived
from locale_notes.internal_core.surface import ViewState


class RecordingView(ViewState):
    def __init__(self) -> None:
        super().__init__()
        self.errors: list[LocaleError] = []
        self.details: list[str] = []

    def show_error(self, error: LocaleError) -> None:
        self.errors.append(error)
        super().show_error(error)

    def show_note_detail(self, content: str) -> None:
        self.details.append(content)
        super().show_note_detail(content)


def _build(auth_response=None, span: float = 500.0):
    provider = SimulatedLocationProvider(auth_response=auth_response)
    renderer = InMemoryMapRenderer()
    view = RecordingView()
    controller = AppController(provider, renderer, view, region_span_m=span)
    return controller, provider, renderer, view


def _coord(lat: float, lon: float) -> Coordinate:
    return Coordinate(latitude=lat, longitude=lon)


def _tracking_at(lat: float, lon: float):
    controller, provider, renderer, view = _build()
    provider.deliver_authorization("authorizedWhenInUse")
    provider.deliver_fixes([_coord(lat, lon)])
    return controller, provider, renderer, view


def test_undetermined_then_denied_surfaces_one_error_and_never_tracks() -> None:
    controller, provider, _, view = _build()

    provider.deliver_authorization("undetermined")
    provider.deliver_authorization("denied")

    assert len(view.errors) == 1
    assert view.errors[0].code == "PERMISSION_DENIED"
    assert view.alert is not None
    assert view.alert.message.startswith("Location access was denied")
    assert provider.start_requests == 0
    assert controller.state == "denied"


def test_undetermined_then_authorized_starts_tracking_once() -> None:
    controller, provider, _, view = _build()

    provider.deliver_authorization("undetermined")
    assert provider.authorization_requests == 1
    assert controller.state == "permission_requested"
    provider.deliver_authorization("authorizedWhenInUse")

    assert view.errors == []
    assert provider.start_requests == 1
    assert controller.state == "tracking"


def test_first_appearance_requests_permission_once_per_session() -> None:
    controller, provider, _, _ = _build()

    controller.appear()
    controller.appear()

    assert provider.authorization_requests == 1
    assert controller.state == "permission_requested"


def test_appearance_with_granted_permission_reaches_tracking() -> None:
    controller, provider, _, _ = _build(auth_response="authorizedAlways")

    controller.appear()

    assert controller.state == "tracking"
    assert controller.authorization_status == "authorizedAlways"
    assert provider.updating is True


def test_denied_is_left_only_by_a_new_authorization_delivery() -> None:
    controller, provider, _, _ = _build()
    states = []
    controller.subscribe(states.append)

    provider.deliver_authorization("restricted")
    controller.appear()
    assert controller.state == "denied"

    provider.deliver_authorization("authorizedWhenInUse")
    assert controller.state == "tracking"
    assert states[0] == "denied"
    assert states[-1] == "tracking"


def test_revoking_permission_stops_tracking() -> None:
    controller, provider, _, view = _tracking_at(10.0, 20.0)

    provider.deliver_authorization("denied")

    assert controller.state == "denied"
    assert provider.updating is False
    assert provider.stop_requests == 1
    assert view.errors[-1].code == "PERMISSION_DENIED"


def test_add_note_without_position_reports_and_creates_nothing() -> None:
    controller, _, renderer, view = _build()

    controller.add_note("Hello")

    assert controller.notes() == []
    assert renderer.annotations == {}
    assert view.alert is not None
    assert view.alert.message.startswith("Unable to determine your location")
    assert view.errors[0].code == "POSITION_UNAVAILABLE"
    assert controller.state == "idle"


def test_add_note_with_position_creates_note_and_one_pin(monkeypatch) -> None:
    controller, _, renderer, view = _tracking_at(37.0, -122.0)
    placed = []
    original_place = controller.projector.place

    def spy_place(note):
        placed.append(note)
        return original_place(note)

    monkeypatch.setattr(controller.projector, "place", spy_place)

    controller.add_note("Hello")

    notes = controller.notes()
    assert len(notes) == 1
    assert notes[0].content == "Hello"
    assert notes[0].coordinate == _coord(37.0, -122.0)
    assert placed == notes
    assert len(renderer.annotations) == 1
    assert view.errors == []


def test_add_note_recenters_on_current_position() -> None:
    controller, provider, renderer, _ = _tracking_at(1.0, 1.0)
    provider.deliver_fixes([_coord(3.0, 4.0)])

    controller.add_note("Here")

    assert [region.center for region in renderer.regions] == [_coord(1.0, 1.0), _coord(3.0, 4.0)]


def test_note_coordinate_is_not_reprojected_after_moving() -> None:
    controller, provider, _, _ = _tracking_at(1.0, 1.0)
    controller.add_note("Pinned")
    provider.deliver_fixes([_coord(9.0, 9.0)])

    assert controller.notes()[0].coordinate == _coord(1.0, 1.0)
    assert controller.current_position == _coord(9.0, 9.0)


def test_empty_content_is_rejected_silently_and_form_stays_open() -> None:
    controller, _, renderer, view = _tracking_at(1.0, 1.0)
    controller.open_note_form()

    controller.add_note("")

    assert controller.notes() == []
    assert renderer.annotations == {}
    assert view.errors == []
    assert view.note_form_open is True


def test_saving_closes_the_note_form() -> None:
    controller, _, _, view = _tracking_at(1.0, 1.0)
    controller.open_note_form()
    assert view.note_form_open is True

    controller.add_note("Saved")
    assert view.note_form_open is False

    controller.open_note_form()
    controller.cancel_note_form()
    assert view.note_form_open is False
    assert len(controller.notes()) == 1


def test_opening_form_without_position_reports_error() -> None:
    controller, _, renderer, view = _build()

    controller.open_note_form()

    assert view.note_form_open is True
    assert view.errors[0].code == "POSITION_UNAVAILABLE"
    assert renderer.regions == []


def test_initial_centering_targets_first_fix_only() -> None:
    controller, provider, renderer, _ = _build(span=750.0)
    provider.deliver_authorization("authorizedWhenInUse")

    provider.deliver_fixes([_coord(1.0, 1.0)])
    provider.deliver_fixes([_coord(2.0, 2.0)])

    assert len(renderer.regions) == 1
    region = renderer.regions[0]
    assert region.center == _coord(1.0, 1.0)
    assert region.width_m == 750.0
    assert region.height_m == 750.0
    assert controller.current_position == _coord(2.0, 2.0)


def test_empty_fix_batch_is_dropped() -> None:
    controller, provider, renderer, view = _build()
    provider.deliver_authorization("authorizedWhenInUse")

    provider.deliver_fixes([])

    assert controller.current_position is None
    assert renderer.regions == []
    assert view.errors == []


def test_tapping_pin_shows_note_detail_once() -> None:
    controller, _, renderer, view = _tracking_at(5.0, 5.0)
    controller.add_note("Lunch")
    handle = next(iter(renderer.annotations))

    renderer.tap(handle)

    assert view.details == ["Lunch"]
    assert view.detail is not None
    assert view.detail.content == "Lunch"

    first_detail_id = view.detail.id
    controller.dismiss_detail()
    assert view.detail is None
    renderer.tap(handle)
    assert view.detail.id != first_detail_id


def test_tapping_user_location_marker_shows_nothing() -> None:
    _, _, renderer, view = _tracking_at(5.0, 5.0)

    renderer.tap(USER_LOCATION_HANDLE)

    assert view.details == []
    assert view.detail is None


def test_later_error_overwrites_unacknowledged_one() -> None:
    controller, provider, _, view = _build()

    controller.add_note("first")
    provider.deliver_authorization("denied")

    assert len(view.errors) == 2
    assert view.alert is not None
    assert view.alert.code == "PERMISSION_DENIED"
    assert view.alert.title == "Error"
    assert view.alert.dismiss_label == "OK"

    controller.dismiss_alert()
    assert view.alert is None


class FailingRenderer(InMemoryMapRenderer):
    def add_annotation(self, coordinate, title, style) -> str:
        raise RuntimeError("renderer rejected annotation for test")


def test_failed_pin_placement_stores_no_note() -> None:
    provider = SimulatedLocationProvider()
    renderer = FailingRenderer()
    view = RecordingView()
    controller = AppController(provider, renderer, view)
    provider.deliver_authorization("authorizedWhenInUse")
    provider.deliver_fixes([_coord(4.0, 4.0)])

    controller.add_note("Orphan")

    assert controller.notes() == []
    assert controller.projector.pins() == []
    assert renderer.annotations == {}
    assert view.errors[-1].code == "PIN_PLACEMENT_FAILED"


def test_undetermined_delivery_without_appear_issues_request_once() -> None:
    controller, provider, _, _ = _build()

    provider.deliver_authorization("undetermined")
    provider.deliver_authorization("undetermined")

    assert provider.authorization_requests == 1
    assert controller.state == "permission_requested"


def test_fix_batch_queued_before_revocation_is_not_applied() -> None:
    controller, provider, renderer, _ = _tracking_at(1.0, 1.0)

    provider.deliver_authorization("denied")
    controller.post(FixesReceived((_coord(6.0, 6.0),)))

    assert controller.state == "denied"
    assert controller.current_position == _coord(1.0, 1.0)
    assert len(renderer.regions) == 1


def test_wait_idle_returns_once_queue_is_drained() -> None:
    controller, _, _, _ = _build()
    controller.add_note("nothing to pin")
    assert controller.wait_idle(timeout=1.0) is True

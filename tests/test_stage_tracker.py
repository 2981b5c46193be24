import contextvars

from trip_planner.middleware import Stage, advance, format_stages, get_stages, reset_stages


def _run_request(*stages):
    reset_stages()
    for stage in stages:
        advance(stage)
    return get_stages(), format_stages()


def test_trail_starts_at_received():
    stages, text = contextvars.copy_context().run(_run_request, Stage.PROMPTED, Stage.COMPLETING)
    assert stages == [Stage.RECEIVED, Stage.PROMPTED, Stage.COMPLETING]
    assert text == "received -> prompted -> completing"


def test_trails_are_isolated_per_context():
    first, _ = contextvars.copy_context().run(_run_request, Stage.PROMPTED)
    second, _ = contextvars.copy_context().run(_run_request, Stage.RESPONDED)
    assert first == [Stage.RECEIVED, Stage.PROMPTED]
    assert second == [Stage.RECEIVED, Stage.RESPONDED]


def _advance_without_reset():
    advance(Stage.PROMPTED)
    return get_stages()


def test_advance_without_reset_starts_its_own_trail():
    first = contextvars.Context().run(_advance_without_reset)
    second = contextvars.Context().run(_advance_without_reset)

    assert first == [Stage.RECEIVED, Stage.PROMPTED]
    assert second == [Stage.RECEIVED, Stage.PROMPTED]
    assert contextvars.Context().run(get_stages) == []

from pathlib import Path

from grayscale_mode.services.configuration import Configuration, RenderContext
from grayscale_mode.services.document import Document
from grayscale_mode.services.effect_applier import EffectApplier, rendered_filter
from grayscale_mode.services.preference_store import PreferenceStore
from grayscale_mode.services.storage import InMemoryStorage, JsonFileStorage
from grayscale_mode.services.trigger_surface import SurfaceKind, SurfaceState, TriggerSurface

from factories import FailingStorage, page_with_controls

CONFIG = Configuration(enabled=True, intensity=100, allow_visitor_toggle=True)


def _load(storage, config=CONFIG, kind=SurfaceKind.FLOATING, element_id="sgmToggleBtn"):
    """Simulate one page load: fresh document, effect first, then the surface."""
    doc = page_with_controls(element_id, kind=kind.value)
    store = PreferenceStore(storage)
    EffectApplier(config, store).apply(doc)
    surface = TriggerSurface(kind, element_id, config, store)
    assert surface.mount(doc)
    return doc, surface


def test_click_and_reload_scenario(storage):
    doc, surface = _load(storage)
    assert doc.has_root_class("sgm-grayscale-root")
    assert not doc.has_root_class("sgm-user-off")
    assert surface.pressed is False
    assert surface.state is SurfaceState.OFF_SHOWN
    assert surface.title == "Grayscale is ON"

    assert surface.activate() is SurfaceState.ON_SHOWN
    assert doc.has_root_class("sgm-user-off")
    assert storage.get_item("sgmUserOff") == "1"
    assert surface.pressed is True
    assert surface.title == "Grayscale is OFF"

    doc, surface = _load(storage)
    assert doc.has_root_class("sgm-user-off")
    assert surface.pressed is True


def test_round_trip_back_to_default(storage):
    _doc, surface = _load(storage)
    surface.activate()
    _doc, surface = _load(storage)
    assert surface.state is SurfaceState.ON_SHOWN
    assert surface.activate() is SurfaceState.OFF_SHOWN
    doc, surface = _load(storage)
    assert surface.state is SurfaceState.OFF_SHOWN
    assert not doc.has_root_class("sgm-user-off")
    assert rendered_filter(doc) == "grayscale(100%)"


def test_round_trip_through_file_backed_profile(tmp_path: Path):
    _doc, surface = _load(JsonFileStorage(str(tmp_path)))
    surface.activate()
    _doc, surface = _load(JsonFileStorage(str(tmp_path)))
    assert surface.state is SurfaceState.ON_SHOWN


def test_write_failures_still_toggle_within_page(write_failing_storage):
    doc, surface = _load(write_failing_storage)
    assert surface.activate() is SurfaceState.ON_SHOWN
    assert doc.has_root_class("sgm-user-off")
    assert surface.pressed is True
    assert surface.activate() is SurfaceState.OFF_SHOWN
    surface.activate()
    # Reload reverts to the default because nothing was persisted
    doc, surface = _load(write_failing_storage)
    assert surface.state is SurfaceState.OFF_SHOWN
    assert not doc.has_root_class("sgm-user-off")


def test_fully_unavailable_storage_degrades_quietly():
    doc, surface = _load(FailingStorage())
    assert surface.state is SurfaceState.OFF_SHOWN
    assert surface.activate() is SurfaceState.ON_SHOWN
    assert rendered_filter(doc) == "none"


def test_display_follows_actual_class_not_written_value(storage):
    doc, surface = _load(storage)
    # Something else flips the class behind the surface's back
    doc.add_root_class("sgm-user-off")
    assert surface.sync() is SurfaceState.ON_SHOWN
    assert surface.activate() is SurfaceState.OFF_SHOWN
    assert storage.get_item("sgmUserOff") == "0"


def test_missing_element_aborts_only_that_surface(store):
    doc = page_with_controls("present")
    missing = TriggerSurface(SurfaceKind.INLINE, "absent", CONFIG, store)
    present = TriggerSurface(SurfaceKind.INLINE, "present", CONFIG, store)
    assert missing.mount(doc) is False
    assert missing.activate() is None
    assert missing.pressed is False
    assert present.mount(doc) is True
    assert present.activate() is SurfaceState.ON_SHOWN


def test_surfaces_share_class_and_key_but_not_live_display(storage):
    doc = page_with_controls("a", "b")
    store = PreferenceStore(storage)
    EffectApplier(CONFIG, store).apply(doc)
    first = TriggerSurface(SurfaceKind.INLINE, "a", CONFIG, store)
    second = TriggerSurface(SurfaceKind.INLINE, "b", CONFIG, store)
    first.mount(doc)
    second.mount(doc)

    first.activate()
    assert first.pressed is True
    # No live cross-surface sync within one page view
    assert second.pressed is False
    # Second re-reads the real state on its own activation: toggles back on
    assert second.activate() is SurfaceState.OFF_SHOWN
    assert storage.get_item("sgmUserOff") == "0"


def test_not_rendered_when_toggle_disallowed_but_filter_installed(store):
    config = Configuration(enabled=True, allow_visitor_toggle=False)
    doc = Document.blank()
    assert EffectApplier(config, store).apply(doc) is True
    for surface in (
        TriggerSurface.floating(config, store),
        TriggerSurface.inline(config, store),
        TriggerSurface.host_chrome(config, store, authorize=lambda: True),
    ):
        assert surface.should_render() is False
        assert surface.render() == ""


def test_not_rendered_when_filter_off_for_context(store):
    config = Configuration(enabled=True, apply_to_admin=False)
    surface = TriggerSurface.floating(config, store)
    assert surface.should_render(RenderContext.PUBLIC) is True
    assert surface.should_render(RenderContext.ADMIN) is False
    assert TriggerSurface.floating(Configuration(enabled=False), store).render() == ""


def test_host_chrome_requires_flag_and_authorization(store):
    allowed = TriggerSurface.host_chrome(CONFIG, store, authorize=lambda: True)
    denied = TriggerSurface.host_chrome(CONFIG, store, authorize=lambda: False)
    hidden = TriggerSurface.host_chrome(
        Configuration(show_in_host_chrome=False), store, authorize=lambda: True
    )
    assert allowed.should_render() is True
    assert denied.should_render() is False
    assert hidden.should_render() is False


def test_render_markup_is_accessible_and_escaped(store):
    config = Configuration(button_label='Gray "mode" <b>')
    markup = TriggerSurface.floating(config, store).render()
    assert 'aria-pressed="false"' in markup
    assert 'aria-label="Gray &quot;mode&quot; &lt;b&gt;"' in markup
    assert 'data-sgm-surface="floating"' in markup
    assert '<style id="sgm-toggle-btn-style">' in markup
    assert "<b>" not in markup

    inline = TriggerSurface.inline(config, store, instance=2).render()
    assert 'id="sgmToggleInline-2"' in inline
    assert "sgm-toggle-btn-style" not in inline


def test_rendered_control_mounts_on_its_own_markup(store):
    surface = TriggerSurface.inline(CONFIG, store)
    doc = Document.blank()
    doc.append_to_body(surface.render())
    assert surface.mount(doc) is True
    assert surface.activate() is SurfaceState.ON_SHOWN


def test_admin_and_public_share_the_same_preference_key(storage):
    # One stored key serves both contexts: a public opt-out also clears the dashboard filter
    config = Configuration(enabled=True, apply_to_admin=True)
    _doc, public_surface = _load(storage, config=config)
    public_surface.activate()

    admin_doc = Document.blank()
    EffectApplier(config, PreferenceStore(storage)).apply(admin_doc, RenderContext.ADMIN)
    assert admin_doc.has_root_class("sgm-user-off")

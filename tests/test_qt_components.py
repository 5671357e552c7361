"""Qt-side collaborators: decode runner, decoder, marker, widgets and window.

Requires pytest-qt; runs on the offscreen platform (see conftest).
"""

from __future__ import annotations

import threading
import time

from PySide6.QtCore import QAbstractAnimation, QPoint, Qt
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QMainWindow, QWidget
import pytest

from app.views.image_tasks import DecodeTaskRunner
from app.views.layout.layout_manager import LayoutManager
from app.views.main_window import AlbumWindow
from app.views.widgets.album_list import AlbumListWidget
from app.views.widgets.location_view import LocationWidget
from app.views.widgets.photo_info import PhotoInfoPanel
from app.views.widgets.photo_stack import PhotoStackWidget, QtAnimationDriver
from app.viewmodels.photo_vm import PhotoVM
from core.errors import DecodeFailure
from core.models import StackEntry
from core.services.transitions import ENTER, EXIT
from infrastructure.catalog import DemoPhotoCatalog
from infrastructure.demo_resources import ensure_demo_resources
from infrastructure.image_service import ImageDecoder, ThumbnailLoader
from infrastructure.marker import QtMarkerRenderer
from infrastructure.settings import AlbumSettings

pytestmark = pytest.mark.qt


def _solid(width: int, height: int, color=Qt.red) -> QImage:
    img = QImage(width, height, QImage.Format_RGB32)
    img.fill(QColor(color))
    return img


# DecodeTaskRunner


def test_runner_delivers_in_submission_order_on_gui_thread(qtbot):
    runner = DecodeTaskRunner()
    gui_thread = threading.get_ident()
    job_threads: list[int] = []
    delivered: list[tuple[int, int]] = []

    def make_job(i: int):
        def job():
            job_threads.append(threading.get_ident())
            # Earlier jobs are slower; a parallel pool would reorder them
            time.sleep(0.02 * (5 - i))
            return i

        return job

    for i in range(5):
        runner.submit(make_job(i), lambda r, e: delivered.append((r, threading.get_ident())))

    qtbot.waitUntil(lambda: len(delivered) == 5, timeout=5000)

    assert [r for r, _ in delivered] == [0, 1, 2, 3, 4]
    assert {t for _, t in delivered} == {gui_thread}
    assert gui_thread not in job_threads
    assert runner.pending_count == 0


def test_runner_delivers_job_errors(qtbot):
    runner = DecodeTaskRunner()
    results = []

    def job():
        raise OSError("unreadable")

    runner.submit(job, lambda r, e: results.append((r, e)))
    qtbot.waitUntil(lambda: bool(results), timeout=5000)

    assert results[0][0] is None
    assert isinstance(results[0][1], OSError)


# ImageDecoder


def test_decoder_reads_image_by_id(tmp_path):
    _solid(40, 30).save(str(tmp_path / "7.png"), "PNG")

    img = ImageDecoder(tmp_path).decode(7)

    assert (img.width(), img.height()) == (40, 30)


def test_decoder_uses_explicit_path_map(tmp_path):
    path = tmp_path / "holiday.png"
    _solid(8, 8).save(str(path), "PNG")

    decoder = ImageDecoder(paths={3: path})

    assert decoder.resolve(3) == path
    assert not decoder.decode(3).isNull()


def test_decoder_missing_resource_raises(tmp_path):
    with pytest.raises(DecodeFailure) as exc_info:
        ImageDecoder(tmp_path).decode(42)
    assert exc_info.value.image_id == 42


def test_decoder_corrupt_resource_raises(tmp_path):
    (tmp_path / "5.jpg").write_bytes(b"definitely not a jpeg")
    with pytest.raises(DecodeFailure):
        ImageDecoder(tmp_path).decode(5)


def test_thumbnail_loader_reads_thumbnail_id_and_bounds_size(tmp_path, photos):
    photo = photos[0]
    _solid(640, 480).save(str(tmp_path / f"{photo.thumbnail_id}.png"), "PNG")

    thumb = ThumbnailLoader(tmp_path, max_side=160).load_thumbnail(photo)

    assert (thumb.width(), thumb.height()) == (160, 120)


def test_thumbnail_loader_missing_thumbnail_raises(tmp_path, photos):
    with pytest.raises(DecodeFailure) as exc_info:
        ThumbnailLoader(tmp_path).load_thumbnail(photos[0])
    assert exc_info.value.image_id == photos[0].thumbnail_id


# Marker


def test_marker_is_half_size_frame_with_arrow(qapp):
    marker = QtMarkerRenderer().make_marker(_solid(160, 120))

    # width/2 + 2 border, height/2 + 2 border + arrow (width/2 / 5)
    assert marker.width() == 82
    assert marker.height() == 78
    # Frame is white, arrow tip area is white, corners outside the arrow are clear
    assert QColor(marker.pixel(41, 1)).lightness() > 200
    assert QColor(marker.pixel(41, 70)).lightness() > 200
    assert QColor.fromRgba(marker.pixel(1, 76)).alpha() == 0


def test_marker_passes_through_non_images():
    sentinel = object()
    assert QtMarkerRenderer().make_marker(sentinel) is sentinel


# Demo resources


def test_demo_resources_generated_once(qapp, tmp_path):
    photos = DemoPhotoCatalog().load_all()

    assert ensure_demo_resources(tmp_path, photos) == 20
    assert ensure_demo_resources(tmp_path, photos) == 0
    assert not ImageDecoder(tmp_path).decode(photos[0].thumbnail_id).isNull()


# Stack widget and animation driver


@pytest.fixture
def stack(qtbot):
    widget = PhotoStackWidget()
    widget.resize(800, 600)
    qtbot.addWidget(widget)
    return widget


def test_stack_widget_adds_on_top_and_removes(stack, photos):
    first = StackEntry(photo=photos[0], image=_solid(400, 300))
    second = StackEntry(photo=photos[1], image=_solid(400, 300, Qt.blue))
    stack.add_entry(first)
    stack.add_entry(second)

    assert stack.labels == [first.view, second.view]
    assert second.view.property("photo_name") == photos[1].name

    stack.remove_entry(first)
    assert first.view is None
    assert stack.labels == [second.view]

    stack.clear()
    assert stack.labels == []


def test_stack_widget_emits_clicked(stack, qtbot):
    with qtbot.waitSignal(stack.clicked, timeout=1000):
        qtbot.mouseClick(stack, Qt.LeftButton)


def test_animation_driver_enter_ends_at_rest_position(stack, qtbot, photos):
    entry = StackEntry(photo=photos[0], image=_solid(400, 300))
    stack.add_entry(entry)
    driver = QtAnimationDriver(stack, lambda: 320)
    done = []

    driver.start(entry, ENTER, 20, lambda: done.append(True))
    qtbot.waitUntil(lambda: bool(done), timeout=2000)

    assert entry.view.pos() == stack.rest_position(entry.view)
    assert driver.running_count == 0


def test_animation_driver_exit_moves_right(stack, qtbot, photos):
    entry = StackEntry(photo=photos[0], image=_solid(400, 300))
    stack.add_entry(entry)
    rest = stack.rest_position(entry.view)
    driver = QtAnimationDriver(stack, lambda: 320)
    done = []

    driver.start(entry, EXIT, 20, lambda: done.append(True))
    qtbot.waitUntil(lambda: bool(done), timeout=2000)

    assert entry.view.pos() == QPoint(rest.x() + 640, rest.y())


def test_animation_driver_stop_suppresses_completion(stack, qtbot, photos):
    entry = StackEntry(photo=photos[0], image=_solid(400, 300))
    stack.add_entry(entry)
    driver = QtAnimationDriver(stack, lambda: 320)
    done = []

    token = driver.start(entry, ENTER, 5000, lambda: done.append(True))
    driver.stop(token)
    qtbot.wait(50)

    assert done == []
    assert driver.running_count == 0


def test_animation_driver_without_view_finishes_immediately(stack, photos):
    entry = StackEntry(photo=photos[0], image=None)
    done = []
    assert QtAnimationDriver(stack, lambda: 0).start(entry, ENTER, 600, lambda: done.append(1)) is None
    assert done == [1]


# Location widget


def test_location_widget_maps_coordinates(qtbot, photos):
    view = LocationWidget(span_deg=20.0)
    view.resize(400, 200)
    qtbot.addWidget(view)
    p = photos[0]

    view.set_center(p.latitude, p.longitude)
    view.set_overlay(None, p.latitude, p.longitude)

    middle = view.to_widget(p.latitude, p.longitude)
    assert middle.x() == pytest.approx(200.0)
    assert middle.y() == pytest.approx(100.0)
    east = view.to_widget(p.latitude, p.longitude + 1_000_000)
    north = view.to_widget(p.latitude + 1_000_000, p.longitude)
    assert east.x() == pytest.approx(220.0)
    assert north.y() == pytest.approx(80.0)
    assert view.overlay == (None, p.latitude, p.longitude)


def test_location_widget_paints_marker(qtbot, photos):
    view = LocationWidget()
    view.resize(300, 200)
    qtbot.addWidget(view)
    marker = QtMarkerRenderer().make_marker(_solid(60, 40))
    view.set_center(0, 0)
    view.set_overlay(marker, 0, 0)

    rendered = view.grab()
    assert not rendered.isNull()


# Info panel


def test_info_panel_shows_formatted_details(qtbot, photos):
    panel = PhotoInfoPanel()
    qtbot.addWidget(panel)

    panel.bind_photo(photos[1])

    assert panel.name_label.text() == "The Photographer"
    assert panel.exposure_label.text() == "1/60 sec"
    assert panel.iso_label.text() == "ISO 800"
    assert panel.location_label.text() == "36.878891, -111.510672"


# Album list


def test_album_list_emits_selected_photo(qtbot, photos):
    widget = AlbumListWidget()
    qtbot.addWidget(widget)
    widget.set_photos([PhotoVM(p) for p in photos])
    assert widget.count() == 10

    with qtbot.waitSignal(widget.photoSelected, timeout=1000) as blocker:
        widget.itemClicked.emit(widget.item(2))

    assert blocker.args == [photos[2]]


def test_album_list_silent_selection(qtbot, photos):
    widget = AlbumListWidget()
    qtbot.addWidget(widget)
    widget.set_photos([PhotoVM(p) for p in photos])

    with qtbot.assertNotEmitted(widget.photoSelected):
        widget.select_row_silently(4)
    assert widget.currentRow() == 4


# Layout / panel toggle


def test_panel_toggle_hides_and_reverses(qtbot):
    window = QMainWindow()
    qtbot.addWidget(window)
    layout = LayoutManager(window, panel_width=200, toggle_ms=30)
    window.setCentralWidget(layout.setup_main_layout(QWidget(), [QWidget()]))
    window.resize(800, 600)

    layout.toggle_panel()
    assert not layout.panel_visible
    assert layout.current_panel_width() == 0
    qtbot.waitUntil(lambda: layout.panel.x() == -200, timeout=2000)

    layout.toggle_panel()
    layout.toggle_panel()  # reversed mid-flight
    assert not layout.panel_visible
    assert layout._panel_anim.direction() == QAbstractAnimation.Backward
    qtbot.waitUntil(lambda: layout.panel.x() == -200, timeout=2000)


# Whole window


@pytest.fixture
def resources(qapp, tmp_path):
    ensure_demo_resources(tmp_path, DemoPhotoCatalog().load_all())
    return tmp_path


def _window(qtbot, resource_dir) -> AlbumWindow:
    win = AlbumWindow(
        catalog=DemoPhotoCatalog(),
        decoder=ImageDecoder(resource_dir),
        marker_renderer=QtMarkerRenderer(),
        thumbnails=ThumbnailLoader(resource_dir),
        settings=AlbumSettings(enter_ms=20, exit_ms=40, panel_ms=20),
    )
    qtbot.addWidget(win)
    return win


def test_window_swaps_selected_photo(qtbot, resources, photos):
    win = _window(qtbot, resources)
    first = win.start()
    assert first.image_id == 1
    assert win.info_panel.name_label.text() == "Antelope Lights"

    win.album_list.photoSelected.emit(photos[3])
    qtbot.waitUntil(
        lambda: win.coordinator.top.photo.image_id == 4 and len(win.coordinator.stack) == 1,
        timeout=5000,
    )

    assert win.info_panel.name_label.text() == photos[3].name
    assert win.location.center == (photos[3].latitude, photos[3].longitude)
    assert isinstance(win.location.overlay[0], QImage)
    assert 4 in win.coordinator.cache
    assert len(win.stack.labels) == 1


def test_window_start_fails_without_resources(qtbot, tmp_path):
    win = _window(qtbot, tmp_path)
    with pytest.raises(DecodeFailure):
        win.start()

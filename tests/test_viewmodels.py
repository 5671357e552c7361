from dataclasses import replace

import pytest

from app.viewmodels.album_vm import AlbumVM
from app.viewmodels.photo_vm import PhotoVM
from core.errors import CatalogError
from tests.fakes import ListCatalog


def test_photo_vm_formats_camera_settings(photos):
    vm = PhotoVM(photos[1])

    assert vm.name == "The Photographer"
    assert vm.exposure_text == "1/60 sec"
    assert vm.aperture_text == "f/3.5"
    assert vm.focal_text == "70 mm"
    assert vm.iso_text == "ISO 800"
    assert vm.location_text == "36.878891, -111.510672"
    assert vm.list_text == "The Photographer\n1/60 sec · f/3.5"


def test_photo_vm_blank_fields_stay_blank(photos):
    vm = PhotoVM(replace(photos[0], exposure="", aperture=""))
    assert vm.exposure_text == ""
    assert vm.list_text == "Antelope Lights"


def test_album_vm_start_shows_first_row(make_harness, photos):
    h = make_harness()
    vm = AlbumVM(h.coordinator, ListCatalog(photos))

    first = vm.start()

    assert first is photos[0]
    assert vm.current_photo is photos[0]
    assert len(vm.items) == 10


def test_album_vm_start_at_row(make_harness, photos):
    h = make_harness()
    vm = AlbumVM(h.coordinator, ListCatalog(photos))
    assert vm.start(first_row=3) is photos[3]


def test_album_vm_row_of(make_harness, photos):
    h = make_harness()
    vm = AlbumVM(h.coordinator, ListCatalog(photos))
    vm.start()
    assert vm.row_of(photos[7]) == 7
    assert vm.row_of(None) == -1


def test_album_vm_empty_catalog(make_harness):
    h = make_harness()
    vm = AlbumVM(h.coordinator, ListCatalog([]))
    with pytest.raises(CatalogError):
        vm.start()

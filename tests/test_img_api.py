import io

import pytest

from rpanel.errors import InvalidParam, NotFound
from rpanel.img_api import IMAGE_EXTENSIONS, ImageStore


@pytest.fixture
def store(tmp_path):
    return ImageStore(tmp_path / "img")


def test_save_and_get_round_trip(store):
    response = store.save([("photo.png", b"\x89PNG data")])
    assert response.msg == "Success"
    assert response.code == 0
    (name,) = response.data
    assert name.endswith(".png")
    body, content_type = store.get(name)
    assert body == b"\x89PNG data"
    assert content_type == "image/png"


def test_save_creates_root(store):
    assert not store.root.exists()
    store.save([("a.gif", b"GIF")])
    assert store.root.is_dir()


def test_extension_is_lower_cased(store):
    (name,) = store.save([("PHOTO.JPG", b"x")]).data
    assert name.endswith(".jpg")


def test_stream_content_is_copied(store):
    (name,) = store.save([("a.bmp", io.BytesIO(b"stream bytes"))]).data
    assert store.get(name)[0] == b"stream bytes"


def test_unsupported_extension_raises(store):
    with pytest.raises(InvalidParam) as info:
        store.save([("notes.txt", b"x")])
    assert "Unsupported file type: txt" in str(info.value)
    assert info.value.status_code == 400


def test_missing_file_name_is_unknown(store):
    with pytest.raises(InvalidParam) as info:
        store.save([(None, b"x")])
    assert "Unsupported file type: unknown" in str(info.value)


def test_earlier_files_stay_saved_on_failure(store):
    with pytest.raises(InvalidParam):
        store.save([("ok.jpeg", b"1"), ("bad.exe", b"2")])
    assert len(store.list().data) == 1


def test_names_are_unique(store):
    names = store.save([("a.png", b"1"), ("a.png", b"2")]).data
    assert len(set(names)) == 2


def test_get_missing_raises_not_found(store):
    store.save([])
    with pytest.raises(NotFound) as info:
        store.get("nope.png")
    assert "图片不存在" in str(info.value)


def test_get_directory_raises_not_found(store):
    (store.root / "sub").mkdir(parents=True)
    with pytest.raises(NotFound):
        store.get("sub")


def test_list_without_root(store):
    response = store.list()
    assert response.data == []
    assert response.msg == "No images found"


def test_list_filters_images(store):
    store.root.mkdir()
    (store.root / "a.PNG").write_bytes(b"1")
    (store.root / "b.txt").write_bytes(b"2")
    (store.root / "c.gif").mkdir()
    (store.root / "d.jpeg").write_bytes(b"3")
    response = store.list()
    assert sorted(response.data) == ["a.PNG", "d.jpeg"]
    assert response.msg == "Success"


def test_every_listed_name_has_image_extension(store):
    store.save([("x.png", b"1"), ("y.bmp", b"2")])
    for name in store.list().data:
        assert name.rsplit(".", 1)[-1] in IMAGE_EXTENSIONS


def test_delete_acknowledges(store, capsys):
    assert store.delete("a", "b") == "删除成功"
    assert "path: a, dir: b" in capsys.readouterr().out
import pytest

from solong.mlx.errors import MlxErrno, MlxError
from solong.mlx.images import Canvas, Image, Instance
from solong.mlx.texture import Texture


def make_texture(width, height):
    pixels = bytearray()
    for y in range(height):
        for x in range(width):
            pixels += bytes((x, y, 7, 255))
    return Texture(width, height, pixels)


def test_img_del_display_then_delete():
    canvas = Canvas()
    img = canvas.new_image(32, 32)
    img2 = canvas.new_image(32, 32)
    canvas.image_to_window(img, 0, 0)
    canvas.delete_image(img)
    canvas.delete_image(img2)
    assert canvas.images == []
    assert canvas.draw_order() == []


def test_put_pixel_within_bounds():
    canvas = Canvas()
    img = canvas.new_image(32, 32)
    img.put_pixel(0, 0, 0xFFFFFFFF)
    assert img.pixels[:4] == b"\xff\xff\xff\xff"
    assert img.pixels[4:8] == b"\x00\x00\x00\x00"


def test_put_pixel_out_of_bounds_fails():
    canvas = Canvas()
    img = canvas.new_image(32, 32)
    with pytest.raises(IndexError):
        img.put_pixel(69, 69, 0xFFFFFFFF)


def test_put_pixel_channel_order():
    img = Image(2, 2)
    img.put_pixel(1, 1, 0x11223344)
    assert img.pixels[12:16] == bytes((0x11, 0x22, 0x33, 0x44))


@pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (0x8000, 1), (1, 0x8000)])
def test_new_image_rejects_bad_dimensions(width, height):
    with pytest.raises(MlxError) as info:
        Canvas().new_image(width, height)
    assert info.value.errno == MlxErrno.INVDIM


def test_image_to_window_returns_index_and_assigns_depth():
    canvas = Canvas()
    img = canvas.new_image(4, 4)
    assert canvas.image_to_window(img, 1, 2) == 0
    assert canvas.image_to_window(img, 3, 4) == 1
    assert [(i.x, i.y, i.z) for i in img.instances] == [(1, 2, 0), (3, 4, 1)]
    assert canvas.zdepth == 2


def test_image_to_window_after_delete_is_invalid():
    canvas = Canvas()
    img = canvas.new_image(4, 4)
    canvas.delete_image(img)
    with pytest.raises(MlxError) as info:
        canvas.image_to_window(img, 0, 0)
    assert info.value.errno == MlxErrno.INVIMG


def test_draw_order_follows_depth():
    canvas = Canvas()
    first = canvas.new_image(4, 4)
    second = canvas.new_image(4, 4)
    canvas.image_to_window(first, 0, 0)
    canvas.image_to_window(second, 0, 0)
    assert [img for img, _ in canvas.draw_order()] == [first, second]
    canvas.set_instance_depth(first.instances[0], 10)
    assert [img for img, _ in canvas.draw_order()] == [second, first]


def test_draw_order_equal_depth_keeps_oldest_first():
    canvas = Canvas()
    img = canvas.new_image(4, 4)
    canvas.image_to_window(img, 0, 0)
    canvas.image_to_window(img, 1, 0)
    for instance in img.instances:
        canvas.set_instance_depth(instance, 5)
    assert [inst.x for _, inst in canvas.draw_order()] == [0, 1]


def test_draw_order_skips_disabled():
    canvas = Canvas()
    a = canvas.new_image(4, 4)
    b = canvas.new_image(4, 4)
    canvas.image_to_window(a, 0, 0)
    canvas.image_to_window(a, 5, 0)
    canvas.image_to_window(b, 0, 0)
    a.instances[0].enabled = False
    b.enabled = False
    order = canvas.draw_order()
    assert [(img, inst.x) for img, inst in order] == [(a, 5)]


def test_delete_image_keeps_other_instances():
    canvas = Canvas()
    a = canvas.new_image(4, 4)
    b = canvas.new_image(4, 4)
    canvas.image_to_window(a, 0, 0)
    canvas.image_to_window(b, 1, 1)
    canvas.delete_image(a)
    assert canvas.images == [b]
    assert [img for img, _ in canvas.draw_order()] == [b]


def test_set_instance_depth_changes_z():
    canvas = Canvas()
    inst = Instance(0, 0, 3)
    canvas.set_instance_depth(inst, -3)
    assert inst.z == -3


def test_resize_changes_buffer():
    img = Image(2, 2)
    img.put_pixel(0, 0, 0xAABBCCDD)
    img.resize(4, 3)
    assert (img.width, img.height) == (4, 3)
    assert len(img.pixels) == 4 * 3 * 4
    assert img.pixels[:4] == bytes((0xAA, 0xBB, 0xCC, 0xDD))


def test_resize_rejects_zero():
    img = Image(2, 2)
    with pytest.raises(MlxError) as info:
        img.resize(0, 2)
    assert info.value.errno == MlxErrno.INVDIM


def test_draw_texture_copies_rows():
    img = Image(4, 4)
    tex = make_texture(2, 2)
    img.draw_texture(tex, 1, 2)
    start = (2 * 4 + 1) * 4
    assert img.pixels[start:start + 4] == bytes((0, 0, 7, 255))
    start = (3 * 4 + 2) * 4
    assert img.pixels[start:start + 4] == bytes((1, 1, 7, 255))
    assert img.pixels[:4] == bytes(4)


def test_draw_texture_too_large():
    img = Image(2, 2)
    with pytest.raises(MlxError) as info:
        img.draw_texture(make_texture(3, 1), 0, 0)
    assert info.value.errno == MlxErrno.INVDIM


def test_draw_texture_bad_position():
    img = Image(2, 2)
    with pytest.raises(MlxError) as info:
        img.draw_texture(make_texture(1, 1), 3, 0)
    assert info.value.errno == MlxErrno.INVPOS


def test_texture_to_image_copies_pixels():
    canvas = Canvas()
    tex = make_texture(3, 2)
    img = canvas.texture_to_image(tex)
    assert (img.width, img.height) == (3, 2)
    assert bytes(img.pixels) == bytes(tex.pixels)
    assert img in canvas.images


def test_texture_area_to_image():
    canvas = Canvas()
    tex = make_texture(4, 4)
    img = canvas.texture_area_to_image(tex, 1, 2, 2, 2)
    assert img.pixels[:4] == bytes((1, 2, 7, 255))
    assert img.pixels[12:16] == bytes((2, 3, 7, 255))


def test_texture_area_errors():
    canvas = Canvas()
    tex = make_texture(4, 4)
    with pytest.raises(MlxError) as info:
        canvas.texture_area_to_image(tex, 0, 0, 5, 1)
    assert info.value.errno == MlxErrno.INVDIM
    with pytest.raises(MlxError) as info:
        canvas.texture_area_to_image(tex, 5, 0, 1, 1)
    assert info.value.errno == MlxErrno.INVPOS


def test_clear_forgets_everything():
    canvas = Canvas()
    img = canvas.new_image(4, 4)
    canvas.image_to_window(img, 0, 0)
    canvas.clear()
    assert canvas.images == []
    assert canvas.draw_order() == []
    assert canvas.zdepth == 0
"""RGBA textures, drawable images and the canvas that orders their instances."""

from __future__ import annotations

import struct
from bisect import bisect_left
from dataclasses import dataclass, field

from .errors import MlxErrno, MlxError

BPP = 4
MAX_DIMENSION = 32767


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _check_dimensions(width: int, height: int) -> None:
    if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
        raise MlxError(MlxErrno.INVDIM)


@dataclass
class Texture:
    """Decoded pixel data, stored row by row as RGBA bytes."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP

    def __post_init__(self) -> None:
        self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.pixels) != expected:
            raise ValueError(
                f"expected {expected} bytes of pixel data, got {len(self.pixels)}"
            )

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y) as a 0xRRGGBBAA integer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * self.bytes_per_pixel
        return int.from_bytes(self.pixels[offset:offset + 4], "big")


@dataclass(eq=False)
class Instance:
    """One placement of an image in the window."""

    x: int
    y: int
    z: int
    enabled: bool = True


class Image:
    """A writable RGBA pixel buffer that can be shown several times."""

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * BPP)
        self.instances: list[Instance] = []
        self.enabled = True

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, instances={len(self.instances)})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise MlxError(MlxErrno.INVPOS)
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Write a 0xRRGGBBAA colour at (x, y)."""
        offset = self._offset(x, y)
        self.pixels[offset:offset + BPP] = (color & 0xFFFFFFFF).to_bytes(4, "big")

    def get_pixel(self, x: int, y: int) -> int:
        """Read the 0xRRGGBBAA colour at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.pixels[offset:offset + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Scale the image to a new size with nearest-neighbour sampling."""
        _check_dimensions(width, height)
        if width == self.width and height == self.height:
            return
        wstep = _f32(self.width / width)
        hstep = _f32(self.height / height)
        columns = [int(_f32(i * wstep)) for i in range(width)]
        old = bytes(self.pixels)
        old_stride = self.width * BPP
        resized = bytearray()
        for j in range(height):
            row_start = int(_f32(j * hstep)) * old_stride
            resized.extend(
                b"".join(
                    old[row_start + c * BPP:row_start + (c + 1) * BPP]
                    for c in columns
                )
            )
        self.pixels = resized
        self.width = width
        self.height = height

    @classmethod
    def from_texture(cls, texture: Texture) -> Image:
        """Create an image holding a copy of the texture's pixels."""
        image = cls(texture.width, texture.height)
        bpp = texture.bytes_per_pixel
        row = texture.width * bpp
        for i in range(texture.height):
            start = i * image.width * bpp
            image.pixels[start:start + row] = texture.pixels[i * row:(i + 1) * row]
        return image


@dataclass
class Canvas:
    """Owns images and the depth-ordered queue of their instances."""

    images: list[Image] = field(default_factory=list)
    zdepth: int = 0
    _queue: list[tuple[Image, int]] = field(default_factory=list, repr=False)
    _sort_pending: bool = field(default=False, repr=False)

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this canvas."""
        image = Image(width, height)
        self.images.insert(0, image)
        return image

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Place a new instance of the image and return its index."""
        instance = Instance(x, y, self.zdepth)
        self.zdepth += 1
        image.instances.append(instance)
        index = len(image.instances) - 1
        self._queue.insert(0, (image, index))
        self._sort_pending = True
        return index

    def delete_image(self, image: Image) -> None:
        """Drop an image and every queued instance of it."""
        self._queue = [entry for entry in self._queue if entry[0] is not image]
        for position, owned in enumerate(self.images):
            if owned is image:
                del self.images[position]
                break

    def set_instance_depth(self, instance: Instance, depth: int) -> None:
        """Change an instance's depth; the queue is re-sorted before drawing."""
        if instance.z == depth:
            return
        instance.z = depth
        self._sort_pending = True

    def _sort_queue(self) -> None:
        ordered: list[tuple[Image, int]] = []
        keys: list[int] = []
        for image, index in self._queue:
            z = image.instances[index].z
            position = bisect_left(keys, z)
            keys.insert(position, z)
            ordered.insert(position, (image, index))
        self._queue = ordered

    def render_order(self) -> list[tuple[Image, Instance]]:
        """Return the visible instances in the order they are drawn."""
        if self._sort_pending:
            self._sort_pending = False
            self._sort_queue()
        return [
            (image, image.instances[index])
            for image, index in self._queue
            if image.enabled and image.instances[index].enabled
        ]
from __future__ import annotations

import io
import unittest

import numpy as np
from PIL import Image

from contracts.raster import DecodeError, PixelBuffer, RasterFormat
from raster_io import decode_raster, encode_raster


def _png_bytes(img: Image.Image) -> bytes:
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


class TestPixelBufferContract(unittest.TestCase):
    def test_offset_is_row_major_interleaved(self) -> None:
        buf = PixelBuffer.from_samples(width=3, height=2, channels=4, samples=bytes(range(24)))
        self.assertEqual(buf.offset(0, 0, 0), 0)
        self.assertEqual(buf.offset(2, 0, 3), 11)
        self.assertEqual(buf.offset(1, 1, 2), 18)
        self.assertEqual(int(buf.samples()[buf.offset(1, 1, 2)]), int(buf.data[1, 1, 2]))

    def test_rejects_mismatched_shape(self) -> None:
        with self.assertRaises(ValueError):
            PixelBuffer(width=2, height=2, channels=4, data=np.zeros((2, 3, 4), dtype=np.uint8))

    def test_rejects_wrong_dtype(self) -> None:
        with self.assertRaises(TypeError):
            PixelBuffer(width=1, height=1, channels=4, data=np.zeros((1, 1, 4), dtype=np.int32))

    def test_from_samples_rejects_wrong_length(self) -> None:
        with self.assertRaises(ValueError):
            PixelBuffer.from_samples(width=2, height=1, channels=4, samples=b"\x00" * 7)


class TestDecodeRaster(unittest.TestCase):
    def test_rgba_png_round_trips_exactly(self) -> None:
        img = Image.new("RGBA", (2, 1))
        img.putpixel((0, 0), (250, 250, 250, 255))
        img.putpixel((1, 0), (10, 10, 10, 128))

        buf = decode_raster(_png_bytes(img))

        self.assertEqual((buf.width, buf.height, buf.channels), (2, 1, 4))
        self.assertEqual(buf.data.tolist(), [[[250, 250, 250, 255], [10, 10, 10, 128]]])
        self.assertTrue(buf.data.flags.writeable)

    def test_rgb_input_gets_opaque_alpha(self) -> None:
        img = Image.new("RGB", (3, 2), (1, 2, 3))
        buf = decode_raster(_png_bytes(img))
        self.assertEqual(buf.channels, 4)
        self.assertTrue((buf.data[:, :, 3] == 255).all())
        self.assertTrue((buf.data[:, :, :3] == [1, 2, 3]).all())

    def test_grayscale_input_is_expanded(self) -> None:
        img = Image.new("L", (2, 2), 77)
        buf = decode_raster(_png_bytes(img))
        self.assertEqual(buf.data[0, 0].tolist(), [77, 77, 77, 255])

    def test_garbage_raises_decode_error(self) -> None:
        with self.assertRaises(DecodeError):
            decode_raster(b"definitely not an image")

    def test_empty_raises_decode_error(self) -> None:
        with self.assertRaises(DecodeError):
            decode_raster(b"")

    def test_truncated_png_raises_decode_error(self) -> None:
        noise = np.random.default_rng(3).integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        data = _png_bytes(Image.fromarray(noise))
        with self.assertRaises(DecodeError):
            decode_raster(data[: len(data) // 2])


class TestEncodeRaster(unittest.TestCase):
    def test_encodes_jpeg_with_declared_dimensions(self) -> None:
        arr = np.zeros((16, 16, 4), dtype=np.uint8)
        arr[:, :8, :3] = 255
        arr[:, 8:, :3] = 12
        arr[:, :, 3] = 40  # alpha is dropped by JPEG
        buf = PixelBuffer(width=16, height=16, channels=4, data=arr)

        raster = encode_raster(buf)

        self.assertEqual(raster.format, RasterFormat.JPEG)
        self.assertEqual((raster.width, raster.height), (16, 16))
        self.assertTrue(raster.data.startswith(b"\xff\xd8"))

        with Image.open(io.BytesIO(raster.data)) as img:
            self.assertEqual(img.format, "JPEG")
            self.assertEqual(img.mode, "RGB")
            self.assertEqual(img.size, (16, 16))
            decoded = np.array(img)
        # block-aligned flat areas survive JPEG almost exactly
        self.assertLessEqual(abs(int(decoded[4, 3, 0]) - 255), 3)
        self.assertLessEqual(abs(int(decoded[4, 12, 0]) - 12), 3)

    def test_encoding_is_deterministic(self) -> None:
        rng = np.random.default_rng(7)
        arr = rng.integers(0, 256, size=(9, 13, 4), dtype=np.uint8)
        buf = PixelBuffer(width=13, height=9, channels=4, data=arr)
        self.assertEqual(encode_raster(buf).data, encode_raster(buf).data)


if __name__ == "__main__":
    unittest.main()

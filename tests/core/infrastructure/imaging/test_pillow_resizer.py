from PIL import Image
import pytest

from core.infrastructure.imaging.pillow_resizer import PillowImageResizer
from core.models.errors import ImageResizeError
from core.models.image import SizeSpec


def box(width: int | None, height: int | None) -> SizeSpec:
    return SizeSpec(label=f"{width}x{height}", width=width, height=height)


@pytest.fixture
def resizer() -> PillowImageResizer:
    return PillowImageResizer()


class TestPillowImageResizer:
    def test_shrinks_wide_image(self, resizer, image_file, tmp_path) -> None:
        source = image_file("wide.jpg", 2000, 1000)
        destination = str(tmp_path / "wide_200x200.jpg")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(200, 200),
            content_type="image/jpeg",
        )

        assert size == (200, 100)
        with Image.open(destination) as img:
            assert img.size == (200, 100)
            assert img.format == "JPEG"

    def test_shrinks_tall_image(self, resizer, image_file, tmp_path) -> None:
        source = image_file("tall.png", 500, 2000, "PNG")
        destination = str(tmp_path / "tall_200x200.png")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(200, 200),
            content_type="image/png",
        )

        assert size == (50, 200)
        with Image.open(destination) as img:
            assert img.format == "PNG"

    def test_never_enlarges(self, resizer, image_file, tmp_path) -> None:
        source = image_file("small.jpg", 150, 100)
        destination = str(tmp_path / "small_800x800.jpg")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(800, 800),
            content_type="image/jpeg",
        )

        assert size == (150, 100)
        with Image.open(destination) as img:
            assert img.size == (150, 100)

    def test_auto_height(self, resizer, image_file, tmp_path) -> None:
        source = image_file("wide.webp", 1000, 500, "WEBP")
        destination = str(tmp_path / "wide_100xauto.webp")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(100, None),
            content_type="image/webp",
        )

        assert size == (100, 50)

    def test_auto_width(self, resizer, image_file, tmp_path) -> None:
        source = image_file("wide.tiff", 1000, 500, "TIFF")
        destination = str(tmp_path / "wide_autox100.tiff")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(None, 100),
            content_type="image/tiff",
        )

        assert size == (200, 100)
        with Image.open(destination) as img:
            assert img.format == "TIFF"

    def test_applies_exif_orientation(self, resizer, image_file, tmp_path) -> None:
        # Orientation 6: stored landscape, displayed portrait
        source = image_file("rotated.jpg", 400, 200, orientation=6)
        destination = str(tmp_path / "rotated_100x100.jpg")

        size = resizer.resize(
            source_path=source,
            destination_path=destination,
            size=box(100, 100),
            content_type="image/jpeg",
        )

        assert size == (50, 100)

    def test_corrupt_input(self, resizer, tmp_path) -> None:
        source = tmp_path / "corrupt.jpg"
        source.write_bytes(b"not an image")

        with pytest.raises(ImageResizeError) as exc:
            resizer.resize(
                source_path=str(source),
                destination_path=str(tmp_path / "corrupt_100x100.jpg"),
                size=box(100, 100),
                content_type="image/jpeg",
            )

        assert exc.value.details["size"] == "100x100"

    def test_non_positive_dimensions(self, resizer, image_file, tmp_path) -> None:
        source = image_file("photo.jpg", 100, 100)

        with pytest.raises(ImageResizeError):
            resizer.resize(
                source_path=source,
                destination_path=str(tmp_path / "photo_0x100.jpg"),
                size=box(0, 100),
                content_type="image/jpeg",
            )

    def test_unsupported_content_type(self, resizer, image_file, tmp_path) -> None:
        source = image_file("photo.jpg", 100, 100)

        with pytest.raises(ImageResizeError):
            resizer.resize(
                source_path=source,
                destination_path=str(tmp_path / "photo.gif"),
                size=box(50, 50),
                content_type="image/gif",
            )

    def test_palette_png_is_resampled_in_rgb(self, resizer, tmp_path) -> None:
        source = tmp_path / "palette.png"
        Image.new("RGB", (400, 400), color="seagreen").convert(
            "P", palette=Image.Palette.ADAPTIVE
        ).save(source, format="PNG")
        destination = str(tmp_path / "palette_100x100.png")

        size = resizer.resize(
            source_path=str(source),
            destination_path=destination,
            size=box(100, 100),
            content_type="image/png",
        )

        assert size == (100, 100)
        with Image.open(destination) as img:
            assert img.mode == "RGB"

    def test_palette_png_keeps_transparency(self, resizer, tmp_path) -> None:
        source = tmp_path / "transparent.png"
        Image.new("RGB", (400, 200), color="seagreen").convert(
            "P", palette=Image.Palette.ADAPTIVE
        ).save(source, format="PNG", transparency=0)
        destination = str(tmp_path / "transparent_100x100.png")

        resizer.resize(
            source_path=str(source),
            destination_path=destination,
            size=box(100, 100),
            content_type="image/png",
        )

        with Image.open(destination) as img:
            assert img.mode == "RGBA"
            assert img.size == (100, 50)

    def test_rgba_image_labelled_as_jpeg(self, resizer, tmp_path) -> None:
        source = tmp_path / "mislabelled.jpg"
        Image.new("RGBA", (400, 400), color=(255, 0, 0, 128)).save(source, format="PNG")
        destination = str(tmp_path / "mislabelled_100x100.jpg")

        size = resizer.resize(
            source_path=str(source),
            destination_path=destination,
            size=box(100, 100),
            content_type="image/jpeg",
        )

        assert size == (100, 100)
        with Image.open(destination) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"

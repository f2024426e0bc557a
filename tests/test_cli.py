import numpy as np
import pytest

from trimosaic.cli import build_parser, config_from_args, main
from trimosaic.raster import read_image, save_image


def test_parser_defaults():
    args = build_parser().parse_args(["--in", "a.jpg", "--out", "b.png"])
    config = config_from_args(args)
    assert config.blur_factor == 1
    assert config.max_points == 2500
    assert config.point_threshold == 10
    assert config.point_rate == 0.075
    assert config.stroke_width == 0.1
    assert config.with_background
    assert config.background_color == (255, 255, 255)
    assert config.stroke_color == (0, 0, 0)
    assert args.seed is None


def test_parser_flags():
    args = build_parser().parse_args([
        "--in", "a.jpg", "--out", "b.png", "--bf", "2", "--mp", "100", "--pt", "5",
        "--pr", "0.5", "--gr", "--ow", "--sw", "2", "--no-wb", "--bc", "#00ff00",
        "--sc", "ff0000", "--seed", "9"])
    config = config_from_args(args)
    assert config.blur_factor == 2
    assert config.max_points == 100
    assert config.point_threshold == 5
    assert config.point_rate == 0.5
    assert config.grayscale and config.wireframe_only
    assert config.stroke_width == 2
    assert not config.with_background
    assert config.background_color == (0, 255, 0)
    assert config.stroke_color == (255, 0, 0)
    assert args.seed == 9


def test_bad_color_is_usage_error():
    with pytest.raises(SystemExit) as e:
        build_parser().parse_args(["--in", "a", "--out", "b", "--bc", "#zz"])
    assert e.value.code == 2


def test_main_renders(tmp_path, disk_image, reset_logging):
    src = tmp_path / "in.png"
    dst = tmp_path / "out.png"
    save_image(src, disk_image)
    code = main(["--in", str(src), "--out", str(dst), "--seed", "1", "--pr", "0.2"])
    assert code == 0
    assert read_image(dst).shape == (40, 50, 3)


def test_main_same_seed_same_file(tmp_path, disk_image, reset_logging):
    src = tmp_path / "in.png"
    save_image(src, disk_image)
    for name in ("a.png", "b.png"):
        assert main(["--in", str(src), "--out", str(tmp_path / name), "--seed", "4"]) == 0
    assert np.array_equal(read_image(tmp_path / "a.png"), read_image(tmp_path / "b.png"))


def test_main_missing_input(tmp_path, reset_logging):
    code = main(["--in", str(tmp_path / "nope.png"), "--out", str(tmp_path / "out.png")])
    assert code == 1


def test_main_degenerate_image(tmp_path, reset_logging):
    src = tmp_path / "line.png"
    save_image(src, np.zeros((1, 20, 3), dtype=np.uint8))
    code = main(["--in", str(src), "--out", str(tmp_path / "out.png")])
    assert code == 1


def test_negative_max_points_is_usage_error(tmp_path, reset_logging):
    with pytest.raises(SystemExit) as e:
        main(["--in", "a", "--out", "b", "--mp", "-5"])
    assert e.value.code == 2


@pytest.mark.parametrize("seed", ["-1", "abc"])
def test_bad_seed_is_a_usage_error(seed):
    with pytest.raises(SystemExit) as e:
        build_parser().parse_args(["--in", "a.jpg", "--out", "b.png", "--seed", seed])
    assert e.value.code == 2

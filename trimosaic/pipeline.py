"""
The whole job: source image -> edges -> points -> triangles -> colors ->
output image
"""
import logging
import time

from .colorize import colorize
from .config import RenderConfig
from .delaunay import triangulate
from .drawer import draw
from .edges import extract, neighbourhood_mean
from .raster import as_raster, read_image, save_image
from .sampling import make_rng, sample

logger = logging.getLogger(__name__)


def generate(source, config=None, rng=None):
    """
    Build the triangle mosaic of an image

    Parameters
    ----------
    source: ndarray(M, N, 3|4)
        An 8-bit RGB(A) image
    config: RenderConfig
        Render options, defaults if None
    rng: numpy.random.Generator or int or None
        Random source for the point sampler; fix it to get identical
        output for identical input

    Returns
    -------
    triangulation: Triangulation
        The colored triangles
    ndarray(M, N, 4)
        The rendered RGBA image
    """
    if config is None:
        config = RenderConfig()
    source = as_raster(source)
    rng = make_rng(rng)

    tic = time.perf_counter()
    field = neighbourhood_mean(extract(source, config.blur_factor))
    X = sample(field, config.point_threshold, config.point_rate, config.max_points, rng)
    del field
    logger.info("Sampled %d points (%.2fs)", len(X), time.perf_counter() - tic)

    tic = time.perf_counter()
    tri = triangulate(X)
    logger.info("Built %d triangles (%.2fs)", len(tri), time.perf_counter() - tic)

    tic = time.perf_counter()
    colorize(tri, source, grayscale=config.grayscale)
    img = draw(tri, config)
    logger.info("Rendered %d x %d image (%.2fs)", img.shape[1], img.shape[0],
                time.perf_counter() - tic)
    return tri, img


def run(input_path, output_path, config=None, seed=None):
    """
    Read an image file, render its mosaic and write it out

    Returns
    -------
    Triangulation
        The triangles that were drawn
    """
    source = read_image(input_path)
    tri, img = generate(source, config, rng=seed)
    save_image(output_path, img)
    logger.info("Saved %s", output_path)
    return tri

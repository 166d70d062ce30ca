import time
import tracemalloc
import gc

import numpy as np

from Nodes.Point import Point
from Nodes.Rectangle import Rectangle
from .KD_tree import KdTree
from .logger import logger

DEFAULT_SIZES = (100, 500, 2000)


def brute_force_nearest(points, target):
    """Vecino más cercano por barrido lineal con numpy. Devuelve (Point, distancia²)."""
    if len(points) == 0:
        raise ValueError("brute_force_nearest() needs at least one point")
    arr = np.asarray([(p.x, p.y) for p in points], dtype=float)
    d2 = ((arr - np.array([target.x, target.y])) ** 2).sum(axis=1)
    idx = int(np.argmin(d2))
    return points[idx], float(d2[idx])


def brute_force_range(points, rect):
    return [p for p in points if rect.contains(p)]


def verify_nearest(tree, points, target):
    """True si tree.nearest(target) está a la misma distancia que el barrido lineal."""
    got = tree.nearest(target)
    _, best_d2 = brute_force_nearest(points, target)
    return got.distance_squared_to(target) == best_d2


def _random_points(rng, n):
    return [Point(float(x), float(y)) for x, y in rng.random((n, 2))]


def _random_rects(rng, n, max_side=0.2):
    rects = []
    for x, y, w, h in rng.random((n, 4)):
        xmin, ymin = x * (1 - max_side), y * (1 - max_side)
        rects.append(Rectangle(xmin, ymin, xmin + w * max_side, ymin + h * max_side))
    return rects


def benchmark_kdtree(sizes=DEFAULT_SIZES, queries=200, seed=None):
    """Inserta puntos aleatorios y mide construcción y consultas para cada tamaño.

    Retorna dict con listas: sizes, times, mem_peaks, heights, range_times,
    nearest_times, brute_force_times, mismatches
    """
    rng = np.random.default_rng(seed)
    sizes = list(sizes)
    times = []
    mem_peaks = []
    heights = []
    range_times = []
    nearest_times = []
    brute_times = []
    mismatches = []

    for n in sizes:
        points = _random_points(rng, n)

        gc.collect()
        tracemalloc.start()
        start = time.perf_counter()

        tree = KdTree()
        for p in points:
            tree.insert(p)

        elapsed = time.perf_counter() - start
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        rects = _random_rects(rng, queries)
        start = time.perf_counter()
        for r in rects:
            tree.range(r)
        range_elapsed = time.perf_counter() - start

        targets = _random_points(rng, queries)
        start = time.perf_counter()
        found = [tree.nearest(t) for t in targets]
        nearest_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        expected = [brute_force_nearest(points, t) for t in targets]
        brute_elapsed = time.perf_counter() - start

        bad = sum(1 for f, (_, d2), t in zip(found, expected, targets)
                  if f.distance_squared_to(t) != d2)
        if bad:
            logger.warning("n=%d: %d nearest results disagree with brute force", n, bad)

        times.append(elapsed)
        mem_peaks.append(peak)
        heights.append(tree.height())
        range_times.append(range_elapsed)
        nearest_times.append(nearest_elapsed)
        brute_times.append(brute_elapsed)
        mismatches.append(bad)
        logger.info("n=%d: insert %.4fs, height %d, nearest %.4fs (brute force %.4fs)",
                    n, elapsed, heights[-1], nearest_elapsed, brute_elapsed)

    return {
        'sizes': sizes,
        'times': times,
        'mem_peaks': mem_peaks,
        'heights': heights,
        'range_times': range_times,
        'nearest_times': nearest_times,
        'brute_force_times': brute_times,
        'mismatches': mismatches
    }


def analyze_kdtree_instance(tree: KdTree, queries=200, seed=None):
    """Analiza un KdTree existente y devuelve métricas similares a benchmark_kdtree para un único tamaño."""
    rng = np.random.default_rng(seed)
    points = list(tree)

    gc.collect()
    tracemalloc.start()
    start = time.perf_counter()
    height = tree.height()
    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    nearest_elapsed = 0.0
    brute_elapsed = 0.0
    bad = 0
    if points:
        targets = _random_points(rng, queries)
        start = time.perf_counter()
        found = [tree.nearest(t) for t in targets]
        nearest_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        expected = [brute_force_nearest(points, t) for t in targets]
        brute_elapsed = time.perf_counter() - start
        bad = sum(1 for f, (_, d2), t in zip(found, expected, targets)
                  if f.distance_squared_to(t) != d2)

    return {
        'sizes': [tree.size()],
        'times': [elapsed],
        'mem_peaks': [peak],
        'heights': [height],
        'nearest_times': [nearest_elapsed],
        'brute_force_times': [brute_elapsed],
        'mismatches': [bad]
    }

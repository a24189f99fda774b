"""
Airfoil point file I/O

CSV 좌표 파일 읽기/쓰기
- Input: columns x, y (row order is the point order)
- Output: columns x, y, z (z = 0, flat 2D profile), <name>_CST.csv
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from .config import DEFAULT_N1, DEFAULT_N2, OUTPUT_EXTENSION, OUTPUT_SUFFIX
from .cst import resample
from .exceptions import InputError
from .geometry import concatenate_surfaces, split_upper_lower

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_points(path: PathLike) -> Tuple[np.ndarray, np.ndarray]:
    """
    Read airfoil coordinates from a CSV file with x and y columns

    Returns:
    --------
    tuple : (x, y) in file row order

    Raises:
    -------
    InputError
        Missing file, missing columns or non-numeric values
    """
    path = Path(path)
    if not path.exists():
        raise InputError(f"Airfoil file not found: {path}")

    try:
        df = pd.read_csv(path, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot parse airfoil file {path}: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in ('x', 'y') if c not in df.columns]
    if missing:
        raise InputError(f"Airfoil file {path} is missing column(s): {', '.join(missing)}")

    try:
        x = pd.to_numeric(df['x']).to_numpy(dtype=float)
        y = pd.to_numeric(df['y']).to_numpy(dtype=float)
    except (ValueError, TypeError) as e:
        raise InputError(f"Non-numeric coordinates in {path}: {e}") from e

    if np.isnan(x).any() or np.isnan(y).any():
        raise InputError(f"Airfoil file {path} has empty coordinate cells")

    logger.debug(f"Read {len(x)} points from {path}")
    return x, y


def read_surfaces(path: PathLike) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Read a point file and split it at the leading edge: (xu, xl, yu, yl)"""
    x, y = read_points(path)
    return split_upper_lower(x, y)


def read_coordinates(path: PathLike) -> Tuple[np.ndarray, np.ndarray]:
    """Read a point file and return (x, y) reordered as upper then lower surface"""
    xu, xl, yu, yl = read_surfaces(path)
    return concatenate_surfaces(xu, xl, yu, yl)


def write_points(x, y, path: PathLike) -> Path:
    """
    Write coordinates to CSV with columns x, y, z (z = 0)

    Returns:
    --------
    Path
        Written file
    """
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    if len(x) != len(y):
        raise InputError(f"x and y lengths differ: {len(x)} != {len(y)}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame({'x': x, 'y': y, 'z': np.zeros(len(x))})
    df.to_csv(path, index=False)

    logger.info(f"Wrote {len(x)} points to {path}")
    return path


def cst_output_path(filename: PathLike, output_dir: Optional[PathLike] = None) -> Path:
    """<stem>_CST.csv next to filename, or inside output_dir"""
    filename = Path(filename)
    directory = Path(output_dir) if output_dir is not None else filename.parent
    return directory / f"{filename.stem}{OUTPUT_SUFFIX}{OUTPUT_EXTENSION}"


def write_cst(x, y, filename: PathLike, output_dir: Optional[PathLike] = None) -> Path:
    """Write CST coordinates to the _CST file derived from an input file name"""
    return write_points(x, y, cst_output_path(filename, output_dir))


def cst_to_csv(w_upper, w_lower, dz: float, n_points: int,
               airfoil_name: str = "Airfoil",
               output_dir: PathLike = ".",
               n1: float = DEFAULT_N1,
               n2: float = DEFAULT_N2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Resample CST weights and write <airfoil_name>_CST.csv

    Returns:
    --------
    tuple : (x, y) written coordinates
    """
    x, y = resample(w_upper, w_lower, dz, n_points, n1=n1, n2=n2)
    write_points(x, y, Path(output_dir) / f"{airfoil_name}{OUTPUT_SUFFIX}{OUTPUT_EXTENSION}")
    return x, y

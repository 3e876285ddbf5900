import numpy as np

from depthfield.distance_field import distance_field

# Compute the distance fields of a volume with several touching regions.


def make_roi_volume() -> np.ndarray:
    """Make a (80, 40, 20) label volume with boxes and spheres."""
    volume = np.zeros((80, 40, 20), dtype=np.int32)
    z, y, x = np.indices(volume.shape)

    volume[4:18, 2:8, 4:8] = 1
    volume[2:8, 4:18, 4:8] = 4
    volume[21:30, 0:10, 11:14] = 7
    volume[(15 - z) ** 2 + (25 - y) ** 2 + (10 - x) ** 2 < 31] = 2
    volume[17:19, :, 3:6] = 1
    volume[:, 19:21, 3:6] = 10
    volume[60:70, 28:36, 14:19] = 17

    shell = ((65 - z) ** 2 + (10 - y) ** 2 + (10 - x) ** 2 < 75) & ~(
        (60 - z) ** 2 + (7 - y) ** 2 + (10 - x) ** 2 < 31
    )
    volume[shell] = 2
    volume[40:56, 25:33, 4:8] = 5

    return volume


if __name__ == "__main__":
    volume = make_roi_volume()
    spacing = (2.0, 1.0, 0.5)

    for strategy in ("multi_label", "per_label"):
        distances = distance_field(volume, spacing=spacing, strategy=strategy)
        print(f"{strategy}: max distance {distances.max():.3f}")

    depth = distance_field((volume > 0).astype(np.uint8), metric="erosion")
    print(f"erosion: max depth {depth.max():.0f}")

"""Constants for selective-history background estimation."""

DEFAULT_S_PARAM = 19  # retained samples per region
DEFAULT_N_PARAM = 3   # kernel size divisor
DEFAULT_PATCH_SIZE = 1  # pixel-level regions

COMBINE_L1 = "l1"    # sum of absolute channel differences
COMBINE_MAX = "max"  # largest absolute channel difference
DEFAULT_COMBINE = COMBINE_L1

SENTINEL_VALUE = 0    # background value of a region with no retained sample

OUTPUT_PREFIX = "output"
DEFAULT_EXTENSION = "png"

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff")

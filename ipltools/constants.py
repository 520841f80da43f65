"""
Constants shared by the IPL decoder, writer and LOD resolver.
"""

# Binary IPL header: "bnry" + 18 x int32
BINARY_IPL_MAGIC = b"bnry"
BINARY_IPL_HEADER_SIZE = 76

# Record strides in bytes
OBJECT_INSTANCE_SIZE = 40  # 7 x f32 + 3 x i32
PARKED_CAR_SIZE = 48       # 4 x f32 + 1 x i32 + 7 x i32
PARKED_CAR_FLAG_COUNT = 7

# Text IPL
SECTION_INST = "inst"
SECTION_CARS = "cars"
SECTION_END = "end"
COMMENT_PREFIX = "#"
MIN_INST_FIELDS = 10
NO_LOD = -1

DEFAULT_HEADER_COMMENT = "# IPL generated with ipl-tools"
UNKNOWN_MODEL_NAME = "unknown"
PLACEHOLDER_MODEL_NAME = "placeholder_modelname"

# File name conventions
TEXT_IPL_SUFFIX_LENGTH = 4  # ".ipl"
STREAM_MARKER = "_stream"

# LOD table artifact
LOD_TABLE_NAME = "OBJ_LOD_MODELS"
LOD_TABLE_UNKNOWN_NAME = "(?)"

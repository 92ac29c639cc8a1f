# Scenario tool utilities
from .logging import log, logWarning, logError, logDebug, init_logging, close_logging, print_summary, get_counts
from .binary import (
    read_exact, read_struct, read_u8, read_i8, read_u16, read_i16, read_u32, read_i32,
    read_f32, read_f64, read_version_f32,
    write_u8, write_i8, write_u16, write_i16, write_u32, write_i32, write_f32, write_f64,
    align_up,
)

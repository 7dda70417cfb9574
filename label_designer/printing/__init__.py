from .units import SCREEN_DPI, inches_to_pixels, pixels_to_inches
from .compiler import (
    PrintDocument,
    PrintSheet,
    check_print_document,
    compile_for_print,
    layout_sheet,
    render_for_print,
)
from .profiles import DPI_PRESETS, PrinterProfile, load_profiles, save_profiles

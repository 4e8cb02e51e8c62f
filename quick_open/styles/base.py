"""Central CSS definitions for the quick-open finder."""

# The finder floats over whatever the host shows
OVERLAY_CSS = """
.finder-overlay {
    align: center top;
    padding-top: 3;
}

.finder-overlay #dialog {
    width: 70vw;
    min-width: 60;
    max-width: 110;
    height: auto;
    max-height: 80%;
    padding: 0 1;
    background: $surface;
    border: round $primary;
}
"""

# Rows, title and footer inside the dialog
FINDER_CSS = """
.finder-title {
    width: 100%;
    text-style: bold;
    color: $accent;
}

.finder-hint {
    width: 100%;
    color: $text-disabled;
}

.result-row {
    height: 1;
    padding: 0 1;
}

.result-row:hover {
    background: $boost;
}

.result-row.selected {
    background: $primary 30%;
    text-style: bold;
}

.no-results {
    color: $text-disabled;
    padding: 1 0;
}
"""

BASE_CSS = OVERLAY_CSS + FINDER_CSS

# PDF Merge Configuration
# Shared settings for pdf_merge.py and pdf_utils.py

# ======================
# INPUT DISCOVERY
# ======================
# Compared case-insensitively against the text after the last "." in a file name
PDF_EXTENSION = "pdf"

# Directory walks list symlinked directories but never descend into them,
# so a link back up the tree cannot loop
FOLLOW_SYMLINKS = False

# ======================
# OUTPUT NAMING
# ======================
# A lone directory argument "scans/" without -o writes "scans.pdf" in the cwd
OUTPUT_SUFFIX = ".pdf"

# ======================
# EXIT CODES
# ======================
EXIT_OK = 0
EXIT_NO_ARGS = 1
EXIT_USAGE = 2
EXIT_SCAN_FAILED = 3       # missing path or unreadable directory
EXIT_NO_PDFS = 4
EXIT_NO_OUTPUT = 5         # several inputs (or a file) and no -o
EXIT_MERGE_FAILED = 6

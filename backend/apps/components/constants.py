"""
Gallery Constants - Single source of truth for paging, sorting and sampling.

Do not hardcode these values elsewhere.
"""

# =============================================================================
# LISTING
# =============================================================================

# Status filter value that disables status filtering (dashboard)
STATUS_ALL = 'ALL'

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

DEFAULT_SORT = 'newest'
SORT_ORDERINGS = {
    'newest': ('-created_at',),
    'oldest': ('created_at',),
    'popular': ('-view_count', '-created_at'),
    'name': ('name',),
}

# =============================================================================
# RANDOM SAMPLING
# =============================================================================

# Random mode shuffles at most this many matching rows, then truncates to the
# page size. Raised to the page size when a bigger page is requested.
RANDOM_CANDIDATE_CAP = 50

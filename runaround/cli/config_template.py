"""
Minimal configuration template for runaround
"""

MINIMAL_CONFIG_TEMPLATE = """# Router Configuration
# ============================================================================
# Every value below is the built-in default. Delete what you do not change.
# Values may reference environment variables: "${VAR}" or "${VAR:-default}"

version: 1

# A* search
# ----------------------------------------------------------------------------
search:
  base_cost: 1          # Cost of one grid step
  turn_penalty: 3       # Extra cost per direction change (fewer bends when higher)
  search_margin: 5      # Cells the search may leave the room grid by
  grid_extra_cells: 10  # Cells rasterized around the room (>= search_margin)
  iteration_factor: 4   # Search gives up after factor * width * height expansions

# Routing ladder
# ----------------------------------------------------------------------------
# Attempts run from coarse to fine until one yields a valid route.
routing:
  stub_cells: 3         # Cells a route leaves its dock straight before turning
  ladder:
    - cell_size: 10
      margin: 6
    - cell_size: 5
      margin: 4
    - cell_size: 5
      margin: 2
    - cell_size: 3
      margin: 2
  final_attempt:
    cell_size: 2
    margin: 1
  fallback_margin: 10   # Exit distance of the room-edge fallback route
  validation_margin: 0  # Clearance required when checking a route against rectangles

# Overlapping paths
# ----------------------------------------------------------------------------
overlap:
  spacing: 6            # Distance between parallel lanes (4-12)
  base_thickness: 2     # Stroke width of a single path
  epsilon: 0.5          # Tolerance for collinear segments
"""

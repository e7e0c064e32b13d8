"""Building blocks for treemap rendering: palette, colors, labels, legend, tooltips."""

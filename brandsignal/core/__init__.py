"""Pure extraction functions over a parsed document. No I/O."""

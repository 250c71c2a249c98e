"""Core Layer: error taxonomy and boundary contracts, no IO."""

"""Message segmentation, field extraction and validation rules."""

"""WhaleWatch: stacked xJewel/Jewel supply chart."""

__version__ = "0.1.0"

"""Post-processors which run on one event worth of data products.

A post-processor declares the data products it needs and returns an update
to the event dictionary. The track matching engine is exposed through the
`track_match` post-processor.
"""

from .manager import PostManager

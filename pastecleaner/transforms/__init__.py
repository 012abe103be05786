"""PasteCleaner Transforms.

Document mutation steps and the pipeline running them:
- RemovePrefabsTransform, SwitchOffPrefabsTransform, RemoveItemsTransform
- OwnershipTransform
- LockCodeTransform, LockRemovalTransform
- TransformPipeline
"""

from .base import Transform, TransformError, TransformRequest, TransformResult, TransformSkipped
from .filtering import RemoveItemsTransform, RemovePrefabsTransform, SwitchOffPrefabsTransform
from .locks import LockCodeTransform, LockRemovalTransform
from .ownership import OwnershipTransform, count_owners, select_default_owner
from .pipeline import PipelineReport, TransformPipeline

__all__ = [
    "Transform",
    "TransformError",
    "TransformRequest",
    "TransformResult",
    "TransformSkipped",
    "RemovePrefabsTransform",
    "SwitchOffPrefabsTransform",
    "RemoveItemsTransform",
    "OwnershipTransform",
    "count_owners",
    "select_default_owner",
    "LockCodeTransform",
    "LockRemovalTransform",
    "PipelineReport",
    "TransformPipeline",
]

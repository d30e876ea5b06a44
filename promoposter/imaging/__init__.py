from promoposter.imaging.acquirer import ImageAcquirer
from promoposter.imaging.compositor import Compositor
from promoposter.imaging.fonts import FontContext
from promoposter.imaging.storage import ArtifactStore
from promoposter.imaging.style import CompositionStyle, LayoutVariant

__all__ = [
    "ArtifactStore",
    "Compositor",
    "CompositionStyle",
    "FontContext",
    "ImageAcquirer",
    "LayoutVariant",
]

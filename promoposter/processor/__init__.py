from promoposter.processor.processor import Processor, build_processor
from promoposter.processor.service import PosterService, build_service

__all__ = ["PosterService", "Processor", "build_processor", "build_service"]

from fastapi import Request

from promoposter.processor.service import PosterService


def get_service(request: Request) -> PosterService:
    return request.app.state.service

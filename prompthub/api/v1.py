from fastapi import APIRouter

from prompthub.features.analytics.routes import router as analytics_router
from prompthub.features.collections.routes import router as collections_router
from prompthub.features.comments.routes import router as comments_router
from prompthub.features.dashboard.routes import router as dashboard_router
from prompthub.features.health.routes import router as health_router
from prompthub.features.likes.routes import router as likes_router
from prompthub.features.monetization.routes import router as monetization_router
from prompthub.features.profiles.routes import router as profiles_router
from prompthub.features.prompts.routes import router as prompts_router
from prompthub.features.purchases.routes import router as purchases_router
from prompthub.features.saved.routes import router as saved_router
from prompthub.features.views.routes import router as views_router
from prompthub.features.withdrawals.routes import router as withdrawals_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(profiles_router, tags=["profiles"])
api_v1_router.include_router(prompts_router, tags=["prompts"])
api_v1_router.include_router(likes_router, tags=["likes"])
api_v1_router.include_router(saved_router, tags=["saved"])
api_v1_router.include_router(comments_router, tags=["comments"])
api_v1_router.include_router(views_router, tags=["views"])
api_v1_router.include_router(collections_router, tags=["collections"])
api_v1_router.include_router(purchases_router, tags=["purchases"])
api_v1_router.include_router(dashboard_router, tags=["dashboard"])
api_v1_router.include_router(analytics_router, tags=["analytics"])
api_v1_router.include_router(monetization_router, tags=["monetization"])
api_v1_router.include_router(withdrawals_router, tags=["withdrawals"])

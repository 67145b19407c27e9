from django.urls import path

from tradecheck import views

urlpatterns = [
    path('verification/verify', views.VerifyAPIView.as_view(), name='verification-verify-api'),
    path('verification/verify-minimal', views.MinimalVerifyAPIView.as_view(), name='verification-verify-minimal-api'),
    path(
        'verification/status/<str:verification_id>',
        views.VerificationStatusAPIView.as_view(),
        name='verification-status-api',
    ),
    path(
        'verification/history/<str:invoice_id>',
        views.VerificationHistoryAPIView.as_view(),
        name='verification-history-api',
    ),
    path('verification/stats', views.VerificationStatsAPIView.as_view(), name='verification-stats-api'),
    path('health', views.HealthAPIView.as_view(), name='health-api'),
]

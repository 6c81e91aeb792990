"""URL routing for dashboards."""

from django.urls import path  # type: ignore

from .views import HostDashboardView, TravelerDashboardView

urlpatterns = [
    # Mounted at api/v1/dashboard/ in config.urls
    path('', TravelerDashboardView.as_view(), name='dashboard-traveler'),
    path('host/', HostDashboardView.as_view(), name='dashboard-host'),
]

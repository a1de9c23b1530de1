from django.urls import path
from . import views

app_name = 'onboarding'

urlpatterns = [
    path('', views.OnboardingView.as_view(), name='onboarding'),
    path('status/', views.OnboardingStatusView.as_view(), name='onboarding_status'),
    path('complete/', views.CompleteOnboardingView.as_view(), name='complete_onboarding'),
]

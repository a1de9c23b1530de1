"""
URL configuration for backend project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from health_checks import health_check, database_health_check

urlpatterns = [
    path("admin/", admin.site.urls),

    # API endpoints
    path("api/auth/", include('authentication.urls')),
    path("api/onboarding/", include('users.onboarding_urls')),
    path("api/users/", include('users.urls')),
    path("api/courses/", include('courses.urls')),
    path("api/projects/", include('courses.project_urls')),
    path("api/schedule/", include('courses.schedule_urls')),
    path("api/course/", include('student.urls')),
    path("api/attendance/", include('student.attendance_urls')),

    # Health check endpoints
    path("health/", health_check, name="health_check"),
    path("health/db/", database_health_check, name="database_health_check"),

    path("", lambda request: JsonResponse({
        "message": "Course Management API",
        "status": "running",
    })),
]

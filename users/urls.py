from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('', views.UserListView.as_view(), name='user_list'),
    path('profile/<int:user_id>/', views.UserProfileView.as_view(), name='user_profile'),
    path('<int:user_id>/role/', views.UpdateUserRoleView.as_view(), name='update_user_role'),
]

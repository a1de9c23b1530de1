from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .forms import AdminUserCreationForm, AdminUserChangeForm
from .models import User, MacAddress


class MacAddressInline(admin.TabularInline):
    model = MacAddress
    extra = 0
    readonly_fields = ['created_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = AdminUserChangeForm
    add_form = AdminUserCreationForm
    list_display = ['email', 'name', 'role', 'is_onboarded', 'is_active', 'is_staff', 'created_at']
    list_filter = ['role', 'is_onboarded', 'is_active', 'is_staff', 'is_superuser', 'created_at']
    search_fields = ['email', 'name', 'number']
    ordering = ['-created_at']
    inlines = [MacAddressInline]
    actions = ['promote_to_admin', 'demote_to_user']

    fieldsets = (
        ('Authentication', {
            'fields': ('email', 'password')
        }),
        ('Personal Info', {
            'fields': ('name', 'number', 'is_onboarded')
        }),
        ('Role & Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')
        }),
        ('Important Dates', {
            'fields': ('last_login', 'date_joined', 'created_at', 'updated_at')
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2', 'role'),
        }),
    )

    readonly_fields = ['date_joined', 'last_login', 'created_at', 'updated_at']

    def promote_to_admin(self, request, queryset):
        updated = queryset.update(role=User.Role.ADMIN)
        self.message_user(request, f'{updated} users were promoted to admin.')
    promote_to_admin.short_description = "Promote selected users to admin"

    def demote_to_user(self, request, queryset):
        updated = queryset.update(role=User.Role.USER)
        self.message_user(request, f'{updated} users were demoted to regular users.')
    demote_to_user.short_description = "Demote selected users to regular users"


@admin.register(MacAddress)
class MacAddressAdmin(admin.ModelAdmin):
    list_display = ['address', 'user', 'created_at']
    search_fields = ['address', 'user__email', 'user__name']
    readonly_fields = ['created_at']

"""
SariWais Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("auth/login", views.login_view),
    path("auth/logout", views.logout_view),
    path("inventory", views.inventory_list_view),
    path("inventory/low-stock", views.inventory_low_stock_view),
    path("inventory/items", views.inventory_items_view),
    path("inventory/stock", views.inventory_stock_view),
    path("inventory/delete", views.inventory_delete_view),
    path("inventory/categories", views.inventory_categories_view),
    path("transactions", views.transactions_view),
    path("reports/sales", views.sales_report_view),
    path("reports/expenses", views.expenses_report_view),
    path("dashboard", views.dashboard_view),
    path("admin/accounts", views.accounts_list_view),
    path("admin/accounts/create", views.accounts_create_view),
    path("admin/accounts/update", views.accounts_update_view),
    path("admin/accounts/delete", views.accounts_delete_view),
    path("admin/accounts/reset-password", views.accounts_reset_password_view),
]

"""orgcore: organization-management backend with workflow and rule automation."""

"""DTOs HTTP (pydantic) de ShareSpace: auth, workspaces y files. Sin lógica de negocio."""

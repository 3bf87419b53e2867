"""Mail-merge document designer: field layout, dataset import and DOCX export."""

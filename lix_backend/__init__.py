"""LoadImageX backend: PNG prompt extraction for image-loader nodes."""

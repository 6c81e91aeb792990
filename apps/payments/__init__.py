"""Payment gateway integration: order creation and callback signatures."""

"""HTTP lookup against usb-ids."""

"""usb2snes protocol calls, one async function per opcode."""

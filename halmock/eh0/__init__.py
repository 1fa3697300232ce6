"""Mocks for pins, SPI, I2C, serial, ADC, delays and a simulated timer, with their errors."""

__all__ = ["error", "adc", "delay", "digital", "i2c", "serial", "spi", "timer"]
"""Sensor models: IMU, magnetometer, GPS, star tracker and sun sensor."""
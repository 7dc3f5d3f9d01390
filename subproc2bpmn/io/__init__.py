"""BPMN loading and the live element registry"""

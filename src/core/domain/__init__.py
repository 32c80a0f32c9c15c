"""Dominio: resultados de generación, perfil del estudiante y cursos persistidos."""
